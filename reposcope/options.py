"""Selectable filter values with display labels."""

from dataclasses import dataclass

from reposcope.types.filters import SortKey, TimeRange


@dataclass(frozen=True)
class Option:
    """A value a filter control can take, with its label."""

    value: str
    label: str


# "" means no language qualifier
LANGUAGES: tuple[Option, ...] = (
    Option("", "All Languages"),
    Option("javascript", "JavaScript"),
    Option("typescript", "TypeScript"),
    Option("python", "Python"),
    Option("java", "Java"),
    Option("go", "Go"),
    Option("rust", "Rust"),
    Option("c", "C"),
    Option("c++", "C++"),
    Option("c#", "C#"),
    Option("ruby", "Ruby"),
    Option("php", "PHP"),
    Option("swift", "Swift"),
    Option("kotlin", "Kotlin"),
    Option("dart", "Dart"),
    Option("scala", "Scala"),
    Option("shell", "Shell"),
    Option("elixir", "Elixir"),
    Option("haskell", "Haskell"),
    Option("lua", "Lua"),
    Option("zig", "Zig"),
)

SORT_OPTIONS: tuple[Option, ...] = (
    Option(SortKey.STARS.value, "Stars"),
    Option(SortKey.FORKS.value, "Forks"),
    Option(SortKey.UPDATED.value, "Recently Updated"),
    Option(SortKey.HELP_WANTED_ISSUES.value, "Help Wanted"),
)

TIME_RANGES: tuple[Option, ...] = (
    Option(TimeRange.DAILY.value, "Today"),
    Option(TimeRange.WEEKLY.value, "This Week"),
    Option(TimeRange.MONTHLY.value, "This Month"),
)


def label_for(options: tuple[Option, ...], value: str) -> str:
    """Return the label of ``value`` in ``options``, or the value itself."""
    for option in options:
        if option.value == value:
            return option.label
    return value
