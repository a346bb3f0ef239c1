from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Option:
    """A choice offered at the end of a chapter, pointing to another chapter by key."""
    text: str = ""
    chapter: str = ""

    @staticmethod
    def load(option_data) -> "Option":
        option_data = option_data or {}
        return Option(option_data.get("text") or "", option_data.get("arc") or "")


@dataclass(frozen=True)
class Chapter:
    """
    One section of the adventure: a title, the narrative paragraphs
    and the options leading out of it.
    """
    title: str = ""
    paragraphs: tuple[str, ...] = field(default_factory=tuple)
    options: tuple[Option, ...] = field(default_factory=tuple)

    @staticmethod
    def load(chapter_data) -> "Chapter":
        chapter_data = chapter_data or {}
        return Chapter(
            title=chapter_data.get("title") or "",
            paragraphs=tuple(paragraph or "" for paragraph in chapter_data.get("story") or ()),
            options=tuple(Option.load(option) for option in chapter_data.get("options") or ()),
        )


class Story(Mapping):
    """
    Read-only mapping of chapter key to Chapter.
    Built once and shared by every request.
    """

    def __init__(self, chapters: Mapping[str, Chapter] = None):
        self._chapters = MappingProxyType(dict(chapters or {}))

    def __getitem__(self, key: str) -> Chapter:
        return self._chapters[key]

    def __iter__(self):
        return iter(self._chapters)

    def __len__(self):
        return len(self._chapters)

    def __repr__(self):
        return f"Story({list(self._chapters)!r})"

    @staticmethod
    def load(story_data) -> "Story":
        return Story({key: Chapter.load(chapter_data) for key, chapter_data in story_data.items()})
