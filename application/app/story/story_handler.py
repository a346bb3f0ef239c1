import logging
import traceback
from typing import Callable, Optional, Union

from fastapi import Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from jinja2 import Template

from application.app.story.story_exceptions import ChapterNotFoundException
from application.app.story.templates import compile_template, default_template
from domain.story import Chapter, Story

logger = logging.getLogger(__name__)

PathFn = Callable[[Request], str]


def default_path_fn(request: Request) -> str:
    """
    Map a request to a chapter key: the decoded URL path without surrounding
    whitespace and without its leading '/'. The root path maps to 'intro'.
    """
    path = request.scope["path"].strip()
    if path == "" or path == "/":
        path = "/intro"
    return path[1:]


class StoryHandler:
    """
    Serves the chapters of a story as HTML pages.
    Holds no per-request state, so a single instance is shared by all requests.
    """

    def __init__(
        self,
        story: Story,
        template: Optional[Union[Template, str]] = None,
        path_fn: Optional[PathFn] = None,
    ):
        self.story = story
        if template is None:
            template = default_template
        elif isinstance(template, str):
            template = compile_template(template)
        self.template = template
        self.path_fn = path_fn or default_path_fn

    def get_chapter(self, chapter_key: str) -> Chapter:
        chapter = self.story.get(chapter_key)
        if chapter is None:
            raise ChapterNotFoundException(chapter_key)
        return chapter

    def render(self, chapter: Chapter, chapter_key: str = None) -> str:
        return self.template.render(chapter=chapter, key=chapter_key)

    def handle(self, request: Request) -> Response:
        chapter_key = self.path_fn(request)

        try:
            chapter = self.get_chapter(chapter_key)
        except ChapterNotFoundException as e:
            logger.debug(f"{e}")
            return PlainTextResponse("Chapter not found.", status_code=404)

        try:
            page = self.render(chapter, chapter_key)
        except Exception as e:
            logger.error(f"Failed to render chapter '{chapter_key}': {e}")
            logger.error(traceback.format_exc())
            return PlainTextResponse("Something went wrong...", status_code=500)

        return HTMLResponse(page)
