from .animation import AnimatedPath, Duration, Speed
from .distance import DistanceModel, GeoPoint, Position
from .easing import EASINGS, get_easing
from .group import MotionGroup, MotionSequence
from .manager import MotionManager, hex_to_rgb
from .player import MotionPlayer
from .smoothing import generate_curved_path

_motion_manager = None

def get_motion_manager() -> MotionManager:
    """Get the global motion manager instance."""
    global _motion_manager
    if _motion_manager is None:
        _motion_manager = MotionManager()
    return _motion_manager

def smooth_path(*args, **kwargs):
    """
    Convenience function to round the corners of a planar path.
    Returns the smoothed path as an (N, 2) numpy array.
    """
    return generate_curved_path(*args, **kwargs)
