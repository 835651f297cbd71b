"""The library context: images, render queue, loop hooks and frame rendering."""

from __future__ import annotations

import time
from typing import Any, Callable, Optional, Sequence

from mlxcore.errors import ErrorCode, MlxError
from mlxcore.images import DrawCall, Image, Instance, sort_render_queue
from mlxcore.keys import Setting
from mlxcore.renderer import Batch, Vertex, projection_matrix

_DEFAULT_SETTINGS = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}

_settings: dict[Setting, int] = dict(_DEFAULT_SETTINGS)


def set_setting(setting: int, value: int) -> None:
    """Change a global setting; call it before creating a context."""
    try:
        key = Setting(setting)
    except ValueError:
        raise ValueError(f"invalid setting: {setting!r}") from None
    _settings[key] = value


def get_setting(setting: int) -> int:
    """Return the current value of a global setting."""
    try:
        return _settings[Setting(setting)]
    except ValueError:
        raise ValueError(f"invalid setting: {setting!r}") from None


class Mlx:
    """A rendering context holding images, instances and per-frame hooks.

    Every flush of drawn vertices is handed to ``on_flush`` together with
    the texture handles bound for it. ``clock`` returns the current time
    in seconds and drives ``delta_time``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        title: str,
        resize: bool = False,
        on_flush: Optional[Callable[[Sequence[Vertex], Sequence[int]], None]] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if title is None:
            raise ValueError("title can't be None")
        if width <= 0:
            raise ValueError("window width must be positive")
        if height <= 0:
            raise ValueError("window height must be positive")
        self.title = title
        self.resizable = resize
        self.width = width
        self.height = height
        self.initial_width = width
        self.initial_height = height
        self.delta_time = 0.0
        self.should_close = False
        self.zdepth = 0
        self.images: list[Image] = []
        self.render_queue: list[DrawCall] = []
        self.hooks: list[tuple[Callable[[Any], None], Any]] = []
        self.projection: tuple[float, ...] | None = None
        self.batch = Batch(on_flush=on_flush)
        self.settings = dict(_settings)
        self._sort_queue = False
        self._handles: dict[Image, int] = {}
        self._next_handle = 1
        self._clock = clock
        self._start = clock()
        self._last_frame = 0.0

    def __enter__(self) -> "Mlx":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.terminate()

    def _register(self, image: Image) -> None:
        if image not in self._handles:
            self._handles[image] = self._next_handle
            self._next_handle += 1
            self.images.insert(0, image)

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this context.

        Raises MlxError with code INVDIM for a zero or too large dimension.
        """
        image = Image(width, height)
        self._register(image)
        return image

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Place a new instance of ``image`` at ``(x, y)`` and return its index."""
        if image is None:
            raise MlxError(ErrorCode.INVIMG)
        self._register(image)
        index = len(image.instances)
        image.instances.append(Instance(x, y, self.zdepth, True))
        self.zdepth += 1
        self.render_queue.insert(0, DrawCall(image, index))
        self._sort_queue = True
        return index

    def delete_image(self, image: Image) -> None:
        """Remove an image and all of its instances from this context."""
        self.render_queue = [call for call in self.render_queue if call.image is not image]
        if image in self._handles:
            del self._handles[image]
            self.images = [img for img in self.images if img is not image]

    def set_instance_depth(self, instance: Instance, zdepth: int) -> None:
        """Change an instance's depth; the queue is re-sorted on the next frame."""
        if instance.z == zdepth:
            return
        instance.z = zdepth
        self._sort_queue = True

    def loop_hook(self, func: Callable[[Any], None], param: Any = None) -> bool:
        """Register ``func(param)`` to run once per frame."""
        if not callable(func):
            raise TypeError("loop hook must be callable")
        self.hooks.append((func, param))
        return True

    def _update_matrix(self) -> None:
        stretch = self.settings.get(Setting.STRETCH_IMAGE) or _settings[Setting.STRETCH_IMAGE]
        width = self.initial_width if stretch else self.width
        height = self.initial_height if stretch else self.height
        self.projection = projection_matrix(width, height, self.zdepth)

    def _run_hooks(self) -> None:
        for func, param in list(self.hooks):
            if self.should_close:
                break
            func(param)

    def _render_images(self) -> None:
        if self._sort_queue:
            self._sort_queue = False
            self.render_queue = sort_render_queue(self.render_queue)
        for call in self.render_queue:
            image = call.image
            instance = call.instance
            if image.enabled and instance.enabled:
                self.batch.draw_instance(image, instance, self._handles.get(image, 0))

    def render_frame(self) -> None:
        """Run one frame: timing, projection, hooks, drawing and the final flush."""
        now = self._clock() - self._start
        self.delta_time = now - self._last_frame
        self._last_frame = now
        if self.width > 1 or self.height > 1:
            self._update_matrix()
        self._run_hooks()
        self._render_images()
        self.batch.flush()

    def loop(self) -> None:
        """Render frames until the window is asked to close."""
        while not self.should_close:
            self.render_frame()

    def close_window(self) -> None:
        """Ask the loop to stop after the current frame."""
        self.should_close = True

    def terminate(self) -> None:
        """Release every hook, draw call and image held by the context."""
        self.should_close = True
        self.hooks.clear()
        self.render_queue.clear()
        self.images.clear()
        self._handles.clear()