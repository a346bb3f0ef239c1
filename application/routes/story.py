from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from starlette.types import Receive, Scope, Send

router = APIRouter()


class ChapterEndpoint:
    """
    Catch-all ASGI endpoint: every path is resolved to a chapter of the loaded story.
    Registered without a method list, so any HTTP method is served the same way.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await run_in_threadpool(request.app.state.story_handler.handle, request)
        await response(scope, receive, send)


router.add_route("/{path:path}", ChapterEndpoint(), include_in_schema=False)
