"""kb_session REST API — session commands, wager queries and physics contacts."""

from fastapi import APIRouter, Request

from src.kb_common.errors import InternalError
from src.kb_common.response import ApiResponse, success_response
from src.kb_session.application.schemas import ContactsRequest, SelectWagerRequest
from src.kb_session.application.service import CommandResult, SessionService

router = APIRouter(tags=["session"])

# One match session per process.
_service = SessionService()


def get_service() -> SessionService:
    return _service


def _respond(request: Request, data: dict | None) -> ApiResponse:
    return success_response(data, getattr(request.state, "request_id", None))


def _command_response(request: Request, result: CommandResult) -> ApiResponse:
    if not result.ok:
        # rendered by the AppError handler in src.main
        raise result.error or InternalError("Command failed without an error")
    return _respond(request, result.data.model_dump() if result.data is not None else None)


@router.get("/session")
async def get_session(request: Request) -> ApiResponse:
    return _respond(request, _service.get_session().model_dump())


@router.post("/session/reset")
async def reset_session(request: Request) -> ApiResponse:
    return _command_response(request, _service.reset())


@router.get("/markets")
async def list_markets(request: Request) -> ApiResponse:
    return _respond(request, _service.get_markets().model_dump())


@router.post("/wagers/select")
async def select_wager(body: SelectWagerRequest, request: Request) -> ApiResponse:
    return _command_response(request, _service.select_wager(body.market, body.outcome))


@router.post("/wagers/clear")
async def clear_wagers(request: Request) -> ApiResponse:
    return _command_response(request, _service.clear_wagers())


@router.post("/wagers/confirm")
async def confirm_wagers(request: Request) -> ApiResponse:
    return _command_response(request, _service.confirm_wagers())


@router.get("/wagers/history")
async def wager_history(request: Request) -> ApiResponse:
    return _respond(request, _service.get_history().model_dump())


@router.post("/match/contacts")
async def report_contacts(body: ContactsRequest, request: Request) -> ApiResponse:
    return _command_response(request, _service.report_contacts(body))
