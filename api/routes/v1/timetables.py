"""
api/routes/v1/timetables.py -- Timetable routes for the Homeroom REST API.

Routes:
  PUT /timetables  -- create or replace the caller's whole week
  GET /timetables  -- fetch the caller's week (404 until the first PUT)

The response is serialized with response_model_exclude_none so the three
slot states stay distinguishable on the wire: an empty period is absent, a
class without a room has no "room" key, and an empty memo has no "memo" key.
"""

from fastapi import APIRouter, Depends, Request, Response

from api.models import TimetablesBody
from auth.dependencies import get_token
from auth.models import Token
from timetables.usecase import TimetablesUsecase

router = APIRouter()


def _usecase(request: Request) -> TimetablesUsecase:
    return request.app.state.timetables_usecase


@router.put("/timetables")
def put_timetables(request: Request, body: TimetablesBody, token: Token = Depends(get_token)) -> Response:
    """Store the week, replacing any previous one wholesale."""
    _usecase(request).add(token, body.to_timetables())
    return Response(status_code=200)


@router.get("/timetables", response_model=TimetablesBody, response_model_exclude_none=True)
def get_timetables(request: Request, token: Token = Depends(get_token)) -> TimetablesBody:
    return TimetablesBody.from_timetables(_usecase(request).get(token))
