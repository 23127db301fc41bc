"""Scale catalog and root + scale -> pitch class resolution."""

from typing import Dict, Tuple, Union

from .logger import get_logger
from .note_matcher import NoteMatcher
from .note_types import Scale
from .pitch_space import PitchClass, PitchSpace

logger = get_logger(__name__)

SCALES: Dict[str, Scale] = {
    scale.name: scale
    for scale in (
        Scale("Major", (0, 2, 4, 5, 7, 9, 11)),
        Scale("Natural Minor", (0, 2, 3, 5, 7, 8, 10)),
        Scale("Major Pentatonic", (0, 2, 4, 7, 9)),
        Scale("Minor Pentatonic", (0, 3, 5, 7, 10)),
        Scale("Chromatic", tuple(range(12))),
    )
}

DEFAULT_SCALE = "Major"


def get_scale(name: str) -> Scale:
    """Look up a catalog scale by name.

    Raises:
        KeyError: If the scale is not in the catalog
    """
    if name not in SCALES:
        raise KeyError(f"Unknown scale: {name}")
    return SCALES[name]


def notes_in_scale(root: str, scale: Union[Scale, str]) -> Tuple[PitchClass, ...]:
    """Pitch classes of ``scale`` built on ``root``, in interval order.

    An unrecognised root or scale name yields an empty tuple rather than an
    error; callers treat that as "no valid round".

    Args:
        root: Root note name; flat spellings such as 'Bb' are accepted
        scale: A ``Scale`` or the name of a catalog scale

    Returns:
        The scale's pitch classes, sharp-spelled
    """
    if isinstance(scale, str):
        scale = SCALES.get(scale)
        if scale is None:
            logger.info("Unknown scale requested, no notes resolved")
            return ()

    root_pc = NoteMatcher.pitch_class(root)
    if root_pc is None:
        logger.info("Unknown root %r for %s, no notes resolved", root, scale.name)
        return ()

    return tuple(PitchSpace.transpose(root_pc, interval) for interval in scale.intervals)
