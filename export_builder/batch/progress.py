"""Progress message formatting."""

CLOCK_FRAMES = ("🕛", "🕐", "🕑", "🕒", "🕓", "🕔", "🕕", "🕖", "🕗", "🕘", "🕙", "🕚")

DONE_MESSAGE = "✅ Done!"


def progress_percent(done: int, total: int) -> int:
    """Completion percentage rounded half up."""
    if total <= 0:
        return 100
    return int(done * 100 / total + 0.5)


def clock_frame(index: int) -> str:
    """Clock face for the given tick, advancing one hour per tick."""
    return CLOCK_FRAMES[index % len(CLOCK_FRAMES)]


def format_progress(done: int, total: int, tick_index: int) -> str:
    """Progress message shown while a batch is running.

    Example:
        >>> format_progress(2, 3, 1)
        '🕐 Building 2/3, 67%'
    """
    percent = progress_percent(done, total)
    return f"{clock_frame(tick_index)} Building {done}/{total}, {percent}%"
