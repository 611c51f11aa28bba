from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.schemas.user import UserCreateRequest, UserCreatedOut, UsersByDepartmentOut
from app.services.user_service import user_service

router = APIRouter(prefix="/users")


# GET /users/by-categories
@router.get(
    "/by-categories",
    status_code=status.HTTP_200_OK,
    response_model=list[UsersByDepartmentOut],
    responses={500: {"model": ErrorResponse}},
    summary="Count users per department",
)
def users_by_categories(db: Session = Depends(get_db)):
    return user_service.users_by_department(db)


# POST /users/create
@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreatedOut,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Register a new user",
)
def create_user(body: UserCreateRequest, db: Session = Depends(get_db)):
    return user_service.create_user(db, body)
