"""
api/routes/v1/tasks.py -- Task routes for the Homeroom REST API.

Routes:
  POST   /tasks            -- add a task (id -1 for new)
  GET    /tasks            -- list the caller's tasks
  DELETE /tasks            -- delete all of the caller's tasks
  DELETE /tasks/{task_id}  -- delete one task owned by the caller

Auth: every route takes the session token via get_token(); TaskUsecase
validates it. The id rules (0 -> id_is_not_zero, negative or foreign ->
invalid_id) live in the usecase so they apply to every caller, not just HTTP.
"""

from fastapi import APIRouter, Depends, Request, Response

from api.models import TaskBody, TaskRow, TasksResponse
from auth.dependencies import get_token
from auth.models import Token
from tasks.usecase import TaskUsecase

router = APIRouter()


def _usecase(request: Request) -> TaskUsecase:
    return request.app.state.task_usecase


@router.post("/tasks")
def add_task(request: Request, body: TaskBody, token: Token = Depends(get_token)) -> Response:
    """Create a task for the caller. Repeating the call creates another task."""
    _usecase(request).add(token, body.to_task())
    return Response(status_code=200)


@router.get("/tasks", response_model=TasksResponse)
def list_tasks(request: Request, token: Token = Depends(get_token)) -> TasksResponse:
    tasks = _usecase(request).get_all(token)
    return TasksResponse(tasks=[TaskRow.from_task(t) for t in tasks])


@router.delete("/tasks")
def delete_all_tasks(request: Request, token: Token = Depends(get_token)) -> Response:
    _usecase(request).delete_all(token)
    return Response(status_code=200)


@router.delete("/tasks/{task_id}")
def delete_task(request: Request, task_id: int, token: Token = Depends(get_token)) -> Response:
    """Delete one task. Only ids from the caller's own list are accepted."""
    _usecase(request).delete(token, task_id)
    return Response(status_code=200)
