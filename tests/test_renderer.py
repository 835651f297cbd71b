import math

import pytest

from mlxcore.images import Image, Instance
from mlxcore.renderer import (
    BATCH_SIZE,
    TEXTURE_SLOTS,
    Batch,
    Vertex,
    projection_matrix,
)


def test_bind_texture_reuses_slot():
    batch = Batch()
    first = batch.bind_texture(7)
    second = batch.bind_texture(9)
    assert first == 0
    assert second == 1
    assert batch.bind_texture(7) == first
    assert batch.bound_textures[:2] == [7, 9]


def test_bind_texture_fills_all_slots_then_flushes():
    flushes = []
    batch = Batch(on_flush=lambda verts, bound: flushes.append((list(verts), list(bound))))
    slots = [batch.bind_texture(handle) for handle in range(1, TEXTURE_SLOTS + 1)]
    assert slots == list(range(TEXTURE_SLOTS))
    image = Image(2, 2)
    batch.draw_instance(image, Instance(0, 0, 0), 1)
    assert batch.bind_texture(100) == 0
    assert batch.bound_textures[0] == 100
    assert batch.bound_textures[1:] == [0] * (TEXTURE_SLOTS - 1)
    assert len(flushes) == 1
    assert flushes[0][1] == list(range(1, TEXTURE_SLOTS + 1))
    assert batch.size == 0


def test_draw_instance_quad_geometry():
    batch = Batch()
    image = Image(4, 3)
    batch.draw_instance(image, Instance(10, 20, 5), 42)
    verts = batch.vertices
    assert batch.size == 6
    assert verts[0] == Vertex(10.0, 20.0, 5.0, 0.0, 0.0, 0)
    assert verts[1] == Vertex(14.0, 23.0, 5.0, 1.0, 1.0, 0)
    assert verts[2] == Vertex(14.0, 20.0, 5.0, 1.0, 0.0, 0)
    assert verts[3] == verts[0]
    assert verts[4] == Vertex(10.0, 23.0, 5.0, 0.0, 1.0, 0)
    assert verts[5] == verts[1]


def test_draw_instance_uses_bound_slot():
    batch = Batch()
    image = Image(1, 1)
    batch.draw_instance(image, Instance(0, 0), 3)
    batch.draw_instance(image, Instance(1, 1), 8)
    assert {v.tex for v in batch.vertices[:6]} == {0}
    assert {v.tex for v in batch.vertices[6:]} == {1}


def test_batch_flushes_when_full():
    flushed = []
    batch = Batch(capacity=12, on_flush=lambda verts, bound: flushed.append(len(verts)))
    image = Image(1, 1)
    batch.draw_instance(image, Instance(0, 0), 1)
    assert flushed == []
    batch.draw_instance(image, Instance(1, 0), 1)
    assert flushed == [12]
    assert batch.size == 0
    assert batch.bound_textures == [0] * TEXTURE_SLOTS


def test_flush_returns_vertices_and_empties():
    batch = Batch()
    image = Image(2, 2)
    batch.draw_instance(image, Instance(0, 0), 5)
    drawn = batch.flush()
    assert len(drawn) == 6
    assert batch.size == 0
    assert batch.flush() == []


def test_default_capacity():
    assert Batch().capacity == BATCH_SIZE == 12000


def test_invalid_capacity():
    with pytest.raises(ValueError):
        Batch(capacity=0)


def test_projection_matrix_invariants():
    width, height, depth = 800, 600, 4
    m = projection_matrix(width, height, depth)
    assert len(m) == 16
    assert m[0] * width == pytest.approx(2.0)
    assert m[5] * height == pytest.approx(-2.0)
    assert m[10] * depth == pytest.approx(-1.0)
    assert m[12] == -1.0
    assert m[13] == 1.0
    assert m[14] == 0.0
    assert m[15] == 1.0
    off_diagonal = [m[i] for i in (1, 2, 3, 4, 6, 7, 8, 9, 11)]
    assert all(value == 0.0 for value in off_diagonal)


def test_projection_matrix_zero_depth():
    m = projection_matrix(100, 100, 0)
    assert m[10] == -math.inf
    assert math.isnan(m[14])
    assert m[0] * 100 == pytest.approx(2.0)