import logging
from types import SimpleNamespace

import pytest
from application.app.story.story_exceptions import ChapterNotFoundException
from application.app.story.story_handler import StoryHandler, default_path_fn
from application.app.story.templates import compile_template, default_template
from domain.story import Story

# --- fixtures

def make_request(path):
    return SimpleNamespace(scope={"path": path})

@pytest.fixture
def story():
    return Story.load({
        "intro": {
            "title": "Start",
            "story": ["You wake up.", "The room is dark."],
            "options": [{"text": "Go left", "arc": "left"}, {"text": "Go right", "arc": "right"}]
        },
        "left": {"title": "Left", "story": ["A wall."], "options": []}
    })

@pytest.fixture
def handler(story):
    return StoryHandler(story)

# --- default_path_fn

@pytest.mark.parametrize("path, key", [
    ("/", "intro"),
    ("", "intro"),
    ("   ", "intro"),
    ("/intro", "intro"),
    (" /intro ", "intro"),
    ("/left", "left"),
    ("/deep/path", "deep/path"),
    ("/what?", "what?"),
    ("/room#2", "room#2"),
])
def test_default_path_fn(path, key):
    assert default_path_fn(make_request(path)) == key

# --- configuration

def test_handler_defaults(handler):
    assert handler.template is default_template
    assert handler.path_fn is default_path_fn

def test_handler_compiles_template_source(story):
    handler = StoryHandler(story, template="<h2>{{ chapter.title }}</h2>")

    assert handler.render(story["intro"]) == "<h2>Start</h2>"

def test_handler_accepts_compiled_template(story):
    template = compile_template("{{ key }}: {{ chapter.title }}")
    handler = StoryHandler(story, template=template)

    assert handler.template is template
    assert handler.render(story["left"], "left") == "left: Left"

# --- lookup

def test_get_chapter(handler, story):
    assert handler.get_chapter("left") is story["left"]

def test_get_chapter_missing(handler):
    with pytest.raises(ChapterNotFoundException) as e:
        handler.get_chapter("missing")

    assert e.value.chapter_key == "missing"

# --- rendering

def test_render_default_template(handler, story):
    page = handler.render(story["intro"])

    assert "<h1>Start</h1>" in page
    assert "<p>You wake up.</p>" in page
    assert "<p>The room is dark.</p>" in page
    assert '<a href="/left">Go left</a>' in page
    assert '<a href="/right">Go right</a>' in page
    assert page.index("You wake up.") < page.index("The room is dark.")
    assert page.index("Go left") < page.index("Go right")

def test_render_escapes_markup():
    story = Story.load({
        "intro": {
            "title": "<i>Start</i>",
            "story": ["<script>alert(1)</script>"],
            "options": [{"text": "<b>Go</b>", "arc": "\"><script>alert(2)</script>"}]
        }
    })
    page = StoryHandler(story).render(story["intro"])

    assert "<script>" not in page
    assert "&lt;i&gt;Start&lt;/i&gt;" in page
    assert "&lt;b&gt;Go&lt;/b&gt;" in page
    assert 'href="/%22%3E%3Cscript%3Ealert%282%29%3C/script%3E"' in page

# --- handle

def test_handle_renders_chapter(handler):
    response = handler.handle(make_request("/intro"))

    assert response.status_code == 200
    assert response.media_type == "text/html"
    assert b"<h1>Start</h1>" in response.body

def test_handle_missing_chapter(handler):
    response = handler.handle(make_request("/missing"))

    assert response.status_code == 404
    assert response.body == b"Chapter not found."

def test_handle_uses_custom_path_fn(story):
    handler = StoryHandler(story, path_fn=lambda request: "left")

    response = handler.handle(make_request("/anything"))

    assert response.status_code == 200
    assert b"<h1>Left</h1>" in response.body

def test_handle_render_failure(story, caplog):
    handler = StoryHandler(story, template="{{ chapter.title }}{{ explode() }}")

    with caplog.at_level(logging.ERROR):
        response = handler.handle(make_request("/intro"))

    assert response.status_code == 500
    assert response.body == b"Something went wrong..."
    assert "Failed to render chapter 'intro'" in caplog.text
