# diffgeomvis

Geometry for visualizing parametrized surfaces in three dimensions. The
package computes vectors, intersections, meshes and geodesics. Drawing is
left to whatever graphics system you use.

## Modules

- `diffgeomvis.geometry`: an immutable `Vec3` with `dot`, `cross`,
  `length`, `length_squared`, `normalized`, `distance_to` and
  `distance_squared_to`. `normalized` raises `ValueError` for a zero vector.
  The module also has `Ray` (`at`, `intersect_plane`, `intersect_sphere`) and
  the free functions `ray_at`, `ray_plane_intersection` and
  `ray_sphere_intersection`. Each intersection returns the ray parameter of
  the hit. It returns `None` when the ray is parallel to the plane, misses
  the sphere, or the hit lies behind the origin.
- `diffgeomvis.perlin`: seeded `PerlinNoise` over a repeating 256-cell
  lattice. It offers `value3d`, `value2d`, `value3d01`, `value2d01`, and the
  octave sums `accumulated_value3d` and `accumulated_value2d`. Each octave
  scales the input by `lacunarity` and the output by `persistence`.
  `PerlinNoise.accumulated_value_max` gives the geometric-series bound.
  `smoothstep` is the degree-seven fade curve that the noise uses.
- `diffgeomvis.mesh`: index helpers `indices_add_tri` and
  `indices_add_quad`, and `any_perpendicular_vector`. `transform_mesh`
  returns a 4x4 numpy matrix that takes the z axis of a unit mesh onto a
  segment. The module builds the unit meshes `rect_mesh`, `cylinder_mesh`,
  `hemisphere_mesh`, `cone_mesh` and `circle_mesh`, each returned as a
  `Mesh`. `TriangleBatch` collects vertices and indices for one draw.
  `DrawList` queues `Instance` objects, each a colour and a model matrix, for
  `line`, `cylinder`, `sphere`, `cone`, `arrow_start_end`,
  `arrow_start_direction`, `circle_arc` and `flow_particle`.
- `diffgeomvis.surface_data`: `SurfaceData` holds a triangulated surface.
  `initialize_surface(parametrization, surface, size)` samples a
  parametrization over a grid of `4*size` by `size` quads. It records
  positions, normals, uv coordinates, curvatures, triangle centres and
  areas, and the total area. `sort_triangles` orders the triangles from far
  to near for a given camera position. `curvature_color_t` maps a vertex's
  curvature onto [0, 1]. `SurfaceType` and `surface_name` name the known
  surface kinds.
- `diffgeomvis.geodesics`: `rk4_step` is one classical Runge–Kutta step for
  a float or an array state. `geodesic_rhs` builds the geodesic equation
  from a surface's Christoffel symbols. `integrate_geodesic` traces a
  unit-speed geodesic and returns its points in (u, v) coordinates.

## What it does not do

- The package has no surface parametrizations of its own. The names in
  `SurfaceType` are labels only. `initialize_surface` needs an object with
  `u_min`, `u_max`, `v_min`, `v_max`, `position`, `normal` and `curvature`.
  `integrate_geodesic` needs an object with `position`, `tangent_u`,
  `tangent_v` and `christoffel_symbols`. You supply both.
- It has no space curves, Frenet frames or curve plots.
- It opens no window and draws nothing. It has no GUI, camera or
  command-line program.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from diffgeomvis.geometry import Vec3, Ray
from diffgeomvis.mesh import cylinder_mesh
from diffgeomvis.geodesics import integrate_geodesic

ray = Ray(Vec3(0.0, 0.0, -5.0), Vec3(0.0, 0.0, 1.0))
print(ray.intersect_sphere(Vec3(0.0, 0.0, 0.0), 1.0))  # 4.0

print(cylinder_mesh(50).triangle_count())  # 100


class Plane:
    def position(self, u, v):
        return Vec3(u, v, 0.0)

    def tangent_u(self, u, v):
        return Vec3(1.0, 0.0, 0.0)

    def tangent_v(self, u, v):
        return Vec3(0.0, 1.0, 0.0)

    def christoffel_symbols(self, u, v):
        zero = ((0.0, 0.0), (0.0, 0.0))
        return zero, zero


points = integrate_geodesic(Plane(), (0.0, 0.0), (1.0, 0.0), length=1.0, steps=4)
print(points[-1])  # close to (1.0, 0.0)
```