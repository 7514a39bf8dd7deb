from .snapshot import SceneSnapshot, capture_scene, apply_scene, differing_fields
from .scene_manager import SceneManager, SpringLengthMode, ConstantParameter

__all__ = [
    "SceneSnapshot", "capture_scene", "apply_scene", "differing_fields",
    "SceneManager", "SpringLengthMode", "ConstantParameter",
]
