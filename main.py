from dotenv import load_dotenv

# Load environment variables BEFORE any other imports
load_dotenv()

import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI
from jinja2 import TemplateError

from application.app.story.story_exceptions import StoryDecodeError
from application.app.story.story_handler import PathFn, StoryHandler
from application.app.story.story_loader import StoryLoader
from application.app.story.templates import load_template
from application.config import Settings
from application.routes import story as story_routes
from domain.story import Story

logger = logging.getLogger(__name__)


def create_app(story: Story, template=None, path_fn: PathFn = None) -> FastAPI:
    """
    Build the web app serving the chapters of `story`.
    `template` and `path_fn` override the default chapter template and path-to-key mapping.
    """
    # every path belongs to the story, so FastAPI's own doc pages are disabled
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.state.story_handler = StoryHandler(story, template=template, path_fn=path_fn)
    app.include_router(story_routes.router)
    return app


def parse_args(argv=None, settings: Settings = None) -> argparse.Namespace:
    settings = settings or Settings.from_env()
    parser = argparse.ArgumentParser(description="Serve a choose your own adventure story as web pages")
    parser.add_argument("--port", type=int, default=settings.port, help="the port to start the adventure web app on")
    parser.add_argument("--host", type=str, default=settings.host, help="the interface to bind to")
    parser.add_argument("--file", type=str, default=settings.story_file, help="the JSON file with the adventure story")
    parser.add_argument("--template", type=str, default=settings.template_file, help="optional Jinja2 chapter template")
    return parser.parse_args(argv)


def build_app_from_args(args: argparse.Namespace) -> FastAPI:
    logger.info(f"Using the story in {args.file}.")
    story = StoryLoader.load_story_from_file(args.file)

    template = None
    if args.template:
        logger.info(f"Using the chapter template in {args.template}.")
        template = load_template(args.template)

    return create_app(story, template=template)


def main(argv=None):
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    logging.getLogger().setLevel(settings.log_level)
    args = parse_args(argv, settings)

    try:
        app = build_app_from_args(args)
    except OSError as e:
        logger.error(f"Could not open file: {e}")
        sys.exit(1)
    except StoryDecodeError as e:
        logger.error(f"Could not load story from {args.file}: {e}")
        sys.exit(1)
    except TemplateError as e:
        logger.error(f"Could not compile template {args.template}: {e}")
        sys.exit(1)

    logger.info(f"Starting the server on port {args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
