import json
import logging
from typing import IO, Union

from application.app.story.story_exceptions import StoryDecodeError
from domain.story import Story

logger = logging.getLogger(__name__)


class StoryLoader():

    @staticmethod
    def load_story(stream: IO[Union[str, bytes]]) -> Story:
        """
        Decode a story from a JSON stream.

        The top level must be an object mapping chapter keys to chapters:
        {"intro": {"title": "...", "story": ["..."], "options": [{"text": "...", "arc": "..."}]}}
        Missing or null values below the top level default to empty values,
        unknown fields are ignored and option targets are not checked against
        the chapter keys.

        Args:
            stream: Text or binary stream holding the JSON document

        Returns:
            The decoded Story

        Raises:
            StoryDecodeError: If the stream is not valid JSON or does not follow the chapter schema
        """
        try:
            story_data = json.loads(stream.read())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoryDecodeError(f"invalid JSON: {e}") from e

        if not isinstance(story_data, dict):
            raise StoryDecodeError(f"expected an object of chapters, got {_json_type(story_data)}")

        for chapter_key, chapter_data in story_data.items():
            StoryLoader._check_chapter(chapter_key, chapter_data)

        story = Story.load(story_data)
        logger.debug(f"Decoded {len(story)} chapters")
        return story

    @staticmethod
    def load_story_from_file(file_path: str) -> Story:
        """
        Load a story from a JSON file.

        Raises:
            OSError: If the file cannot be opened (FileNotFoundError, PermissionError, ...)
            StoryDecodeError: If the file content is not a well-formed story
        """
        logger.info(f"Loading story from: {file_path}")
        with open(file_path, "rb") as file:
            story = StoryLoader.load_story(file)
        logger.info(f"Successfully loaded {len(story)} chapters from {file_path}")
        return story

    @staticmethod
    def _check_chapter(chapter_key: str, chapter_data) -> None:
        if chapter_data is None:
            return
        if not isinstance(chapter_data, dict):
            raise StoryDecodeError(f"chapter '{chapter_key}' must be an object, got {_json_type(chapter_data)}")

        title = chapter_data.get("title")
        if title is not None and not isinstance(title, str):
            raise StoryDecodeError(f"chapter '{chapter_key}': 'title' must be a string, got {_json_type(title)}")

        paragraphs = chapter_data.get("story")
        if paragraphs is not None:
            if not isinstance(paragraphs, list):
                raise StoryDecodeError(f"chapter '{chapter_key}': 'story' must be an array, got {_json_type(paragraphs)}")
            for i, paragraph in enumerate(paragraphs):
                if paragraph is not None and not isinstance(paragraph, str):
                    raise StoryDecodeError(
                        f"chapter '{chapter_key}': 'story[{i}]' must be a string, got {_json_type(paragraph)}"
                    )

        options = chapter_data.get("options")
        if options is not None:
            if not isinstance(options, list):
                raise StoryDecodeError(f"chapter '{chapter_key}': 'options' must be an array, got {_json_type(options)}")
            for i, option in enumerate(options):
                if option is None:
                    continue
                if not isinstance(option, dict):
                    raise StoryDecodeError(
                        f"chapter '{chapter_key}': 'options[{i}]' must be an object, got {_json_type(option)}"
                    )
                for field_name in ("text", "arc"):
                    value = option.get(field_name)
                    if value is not None and not isinstance(value, str):
                        raise StoryDecodeError(
                            f"chapter '{chapter_key}': 'options[{i}].{field_name}' must be a string, got {_json_type(value)}"
                        )


def _json_type(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
