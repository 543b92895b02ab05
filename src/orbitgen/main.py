"""Main entry point for orbitgen."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from .errors import ConfigError
from .logging_config import setup_logging
from .scenes import PlanetScene, create_solar_system_scene
from .scenes.planets import DEFAULT_EDGE_BOLD

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Orbitgen - Procedural Orbital Scene Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        type=Path,
        help="Planet config file (default: bundled solar system)",
    )
    parser.add_argument(
        "-t", "--ticks",
        type=int,
        default=0,
        help="Number of orbital ticks to advance before output (default: 0)",
    )
    parser.add_argument(
        "--bold",
        type=float,
        default=DEFAULT_EDGE_BOLD,
        help=f"Edge strip width (default: {DEFAULT_EDGE_BOLD})",
    )
    parser.add_argument(
        "-e", "--export",
        metavar="PATH",
        help="Export the scene meshes through trimesh (.glb, .obj, ...)",
    )
    parser.add_argument(
        "-r", "--render",
        metavar="PATH",
        help="Render the scene to an image file",
    )
    parser.add_argument(
        "--resolution",
        metavar="WxH",
        default="1920x1080",
        help="Render resolution (default: 1920x1080)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)
    if args.ticks < 0:
        parser.error("--ticks must not be negative")
    if not args.bold > 0:
        parser.error("--bold must be positive")
    try:
        width, height = map(int, args.resolution.lower().split("x"))
    except ValueError:
        parser.error(f"--resolution must look like WxH, got {args.resolution!r}")
    if width <= 0 or height <= 0:
        parser.error("--resolution dimensions must be positive")
    args.resolution = (width, height)
    return args


def summarize(scene: PlanetScene) -> str:
    """Describe each planet's position and mesh sizes."""
    lines = [
        "Orbitgen - Procedural Orbital Scene Generator",
        "=" * 40,
        f"Tick {scene.ticks}, {len(scene)} planets:",
    ]
    for planet, surface, edges in zip(scene.planets, scene.surfaces(), scene.edges()):
        x, y, z = planet.placement.center
        r, azimuth, _ = planet.orbit.coord.spherical()
        lines.append(
            f"- {planet.name}: center=({x:.2f}, {y:.2f}, {z:.2f}) "
            f"r={r:.2f} azimuth={azimuth:.3f} "
            f"({surface.face_count} faces, {edges.face_count} edge faces)"
        )
    frame = scene.frame()
    lines.append(
        f"Frame: {frame.vertex_count} vertices, {frame.index_count} indices"
    )
    return "\n".join(lines)


def render_scene(scene: PlanetScene, output_path: Path, width: int, height: int) -> None:
    """Render the scene offscreen with pyrender and save it as an image."""
    import pyrender
    from PIL import Image

    tm_scene = scene.to_trimesh_scene()
    pr_scene = pyrender.Scene(ambient_light=[0.3, 0.3, 0.3])

    for geom in tm_scene.dump():
        pr_scene.add(pyrender.Mesh.from_trimesh(geom, smooth=False))

    # Look down on the orbital (XY) plane from above and to the side
    bounds = tm_scene.bounds
    scene_center = (bounds[0] + bounds[1]) / 2
    scene_size = np.linalg.norm(bounds[1] - bounds[0])
    cam_pos = scene_center + np.array([0.6, 0.4, 0.6]) * scene_size
    up = np.array([0.0, 0.0, 1.0])

    forward = scene_center - cam_pos
    forward = forward / np.linalg.norm(forward)
    right = np.cross(forward, up)
    right = right / np.linalg.norm(right)
    up = np.cross(right, forward)

    camera_pose = np.eye(4)
    camera_pose[:3, 0] = right
    camera_pose[:3, 1] = up
    camera_pose[:3, 2] = -forward  # Camera looks down -Z
    camera_pose[:3, 3] = cam_pos

    camera = pyrender.PerspectiveCamera(yfov=np.pi / 4.0, znear=0.1, zfar=scene_size * 4)
    pr_scene.add(camera, pose=camera_pose)

    # Light from the origin outward, where the sun sits
    light = pyrender.PointLight(color=np.ones(3), intensity=scene_size ** 2)
    pr_scene.add(light, pose=np.eye(4))

    renderer = pyrender.OffscreenRenderer(width, height)
    try:
        color, _ = renderer.render(pr_scene)
    finally:
        renderer.delete()

    Image.fromarray(color).save(str(output_path))


def main(argv: list[str] | None = None) -> int:
    """Run orbitgen from the command line."""
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        scene = create_solar_system_scene(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    scene.edge_bold = args.bold
    scene.update(args.ticks)
    print(summarize(scene))

    if args.export:
        output_path = Path(args.export)
        scene.to_trimesh_scene().export(str(output_path))
        print(f"Exported scene to {output_path}")

    if args.render:
        width, height = args.resolution
        output_path = Path(args.render)
        print(f"\nRendering to {output_path} ({width}x{height})...")
        render_scene(scene, output_path, width, height)
        print(f"Saved render to {output_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
