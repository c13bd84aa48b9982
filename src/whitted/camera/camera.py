"""Pinhole camera, primary ray generation and the parallel render loop.

The camera sits at the origin of its own frame looking down -z at a canvas
one unit away. Its transform is a view transform (world -> camera); the
inverse carries canvas points and the eye back into world space.

Canvas geometry from the field of view (radians) and aspect ratio:

    half_view = tan(field_of_view / 2)
    aspect >= 1:  half_width = half_view,          half_height = half_view / aspect
    aspect <  1:  half_width = half_view * aspect, half_height = half_view
    pixel_size = 2 * half_width / hsize

Primary ray directions for the whole image are produced in one Taichi
kernel; shading then runs in a thread pool over image rows, since the world
is immutable for the whole render.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64)
    >>> from whitted.camera.camera import Camera
    >>> from whitted.core.ray import point, vector
    >>> from whitted.core.transforms import view_transform
    >>> camera = Camera(160, 120, math.pi / 3.0, view_transform(
    ...     point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0)))
    >>> image = camera.render(world, callback=lambda done, total: None)
"""

import math
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.ray import ORIGIN, Ray, Tuple4, normalize, point, vector
from whitted.core.transforms import Matrix4, identity, inverse

if TYPE_CHECKING:
    from whitted.scene.world import World

# Progress callback type: (rows_done, total_rows) -> None
ProgressCallback = Callable[[int, int], None]


# =============================================================================
# Ray Generation Kernel
# =============================================================================


@ti.kernel
def _generate_directions(
    directions: ti.types.ndarray(dtype=ti.f64, ndim=3),
    inv: ti.types.ndarray(dtype=ti.f64, ndim=2),
    origin: ti.types.ndarray(dtype=ti.f64, ndim=1),
    half_width: ti.f64,
    half_height: ti.f64,
    pixel_size: ti.f64,
):
    """Fill directions[y, x] with the unit world-space ray direction per pixel."""
    for y, x in ti.ndrange(directions.shape[0], directions.shape[1]):
        world_x = half_width - (ti.cast(x, ti.f64) + 0.5) * pixel_size
        world_y = half_height - (ti.cast(y, ti.f64) + 0.5) * pixel_size

        # inv @ point(world_x, world_y, -1), minus the eye position
        dx = inv[0, 0] * world_x + inv[0, 1] * world_y - inv[0, 2] + inv[0, 3] - origin[0]
        dy = inv[1, 0] * world_x + inv[1, 1] * world_y - inv[1, 2] + inv[1, 3] - origin[1]
        dz = inv[2, 0] * world_x + inv[2, 1] * world_y - inv[2, 2] + inv[2, 3] - origin[2]

        length = ti.sqrt(dx * dx + dy * dy + dz * dz)
        directions[y, x, 0] = dx / length
        directions[y, x, 1] = dy / length
        directions[y, x, 2] = dz / length


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A pinhole camera producing an hsize x vsize image.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Horizontal or vertical angle of view in radians,
            whichever image axis is longer.
        half_width: Half the canvas width at unit distance.
        half_height: Half the canvas height at unit distance.
        pixel_size: Canvas size of one pixel.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: "Matrix4 | None" = None,
    ) -> None:
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Image size must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi) radians, got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2.0)
        aspect = hsize / vsize
        if aspect >= 1.0:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = (self.half_width * 2.0) / hsize

        self.transform = transform if transform is not None else identity()

    @property
    def transform(self) -> Matrix4:
        """World-to-camera view transform."""
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4) -> None:
        inv = inverse(value)
        self._transform = np.array(value, dtype=np.float64)
        self._inverse = inv
        self._origin = inv @ ORIGIN

    @property
    def origin(self) -> Tuple4:
        """Eye position in world space."""
        return self._origin

    def ray_for_pixel(self, x: int, y: int) -> Ray:
        """Build the world-space ray through the center of pixel (x, y).

        Args:
            x: Column, 0 at the left edge.
            y: Row, 0 at the top edge.
        """
        world_x = self.half_width - (x + 0.5) * self.pixel_size
        world_y = self.half_height - (y + 0.5) * self.pixel_size

        pixel = self._inverse @ point(world_x, world_y, -1.0)
        direction = normalize(pixel - self._origin)
        return Ray(self._origin, direction)

    def generate_rays(self) -> npt.NDArray[np.float64]:
        """Compute every primary ray direction in one data-parallel pass.

        Taichi must be initialized before calling this.

        Returns:
            Array of shape (vsize, hsize, 3) of unit world-space directions;
            every ray starts at ``origin``.
        """
        directions = np.zeros((self.vsize, self.hsize, 3), dtype=np.float64)
        _generate_directions(
            directions,
            np.ascontiguousarray(self._inverse),
            np.ascontiguousarray(self._origin[:3]),
            self.half_width,
            self.half_height,
            self.pixel_size,
        )
        return directions

    def render(
        self,
        world: "World",
        workers: int | None = None,
        callback: "ProgressCallback | None" = None,
    ) -> npt.NDArray[np.float64]:
        """Render the world as seen from this camera.

        Rows are shaded concurrently; each pixel is an independent
        ``world.color_at(ray, 0)`` call, so the result does not depend on
        scheduling. Shading is pure Python and holds the GIL, so the
        threads interleave rows rather than run them in parallel; extra
        workers mainly keep progress reporting responsive.

        Args:
            world: The scene to render; must not be mutated while rendering.
            workers: Thread count; defaults to the number of CPUs.
            callback: Optional function called with (rows_done, total_rows)
                as each row completes.

        Returns:
            Row-major image of shape (vsize, hsize, 3), float64 in [0, 1].
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        directions = self.generate_rays()
        image = np.zeros((self.vsize, self.hsize, 3), dtype=np.float64)

        def shade_row(y: int) -> int:
            for x in range(self.hsize):
                d = directions[y, x]
                ray = Ray(self._origin, vector(d[0], d[1], d[2]))
                image[y, x] = world.color_at(ray, 0).as_tuple()
            return y

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(shade_row, y) for y in range(self.vsize)]
            for done, future in enumerate(as_completed(futures), start=1):
                future.result()
                if callback is not None:
                    callback(done, self.vsize)

        return image

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view})"
        )
