"""Core cleanup logic: action dispatch, stages, theme and paths."""
