"""Demo entry point: build a random segment scene and query it."""

import logging
import random
import sys

from kd_segments.collide import find_collisions, nearest_shapes
from kd_segments.config import Settings, settings
from kd_segments.engine import Tree, build
from kd_segments.geometry import Axis, Segment
from kd_segments.oracle import SegmentOracle


def setup_logging(level: str | None = None) -> None:
    """Configure logging for the demo."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def random_segments(count: int, extent: float, seed: int | None = None) -> list[Segment]:
    """Generate ``count`` segments with endpoints inside [0, extent]^2."""
    rng = random.Random(seed)
    return [
        Segment.from_coords(
            rng.uniform(0, extent),
            rng.uniform(0, extent),
            rng.uniform(0, extent),
            rng.uniform(0, extent),
        )
        for _ in range(count)
    ]


def build_scene(config: Settings | None = None) -> tuple[Tree[Segment], Segment]:
    """Build the demo tree and pick a needle crossing the scene diagonally."""
    config = config or settings
    segments = random_segments(config.demo_segments, config.demo_extent, config.demo_seed)
    oracle = SegmentOracle(min_fragment_extent=config.min_fragment_extent)
    tree = build(
        [Axis.HORIZONTAL, Axis.VERTICAL],
        segments,
        oracle,
        max_depth=config.max_tree_depth,
        on_error=config.on_geometry_error,
    )
    extent = config.demo_extent
    needle = Segment.from_coords(extent * 0.25, extent * 0.25, extent * 0.75, extent * 0.6)
    return tree, needle


def run() -> None:
    """Entry point for the demo."""
    setup_logging()
    logger = logging.getLogger(__name__)

    tree, needle = build_scene()
    logger.info("Tree has %d cuts", sum(1 for _ in tree.cut_guides()))

    collisions = find_collisions(tree, needle)
    logger.info("Needle collides with %d segments: %s", len(collisions), collisions)

    for distance, shape_id in nearest_shapes(tree, needle, limit=3):
        logger.info("Nearest segment %d at distance %.3f", shape_id, distance)


if __name__ == "__main__":
    run()
