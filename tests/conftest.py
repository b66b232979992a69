"""Test configuration and helpers."""

from polyvote.domain.value import EntityRef


def user(user_id: int | str) -> EntityRef:
    """Reference to a test voter."""
    return EntityRef.of("user", user_id)


def idea(idea_id: int | str) -> EntityRef:
    """Reference to a test votable of type "idea"."""
    return EntityRef.of("idea", idea_id)


def feature(feature_id: int | str) -> EntityRef:
    """Reference to a test votable of type "feature"."""
    return EntityRef.of("feature", feature_id)
