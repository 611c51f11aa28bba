from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    The status code doubles as the numeric `code` of the error body.
    """
    def __init__(self, status_code: int, message: str):
        super().__init__(status_code=status_code, detail=message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class DataAccessException(AppException):
    def __init__(self, message: str = "Error accessing data"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource", message: str | None = None):
        super().__init__(status.HTTP_404_NOT_FOUND, message or f"{resource} not found")


class DepartmentNotFoundException(NotFoundException):
    def __init__(self, department_id: int):
        super().__init__("Department", f"Department not found with ID: {department_id}")


class DuplicateEntryException(AppException):
    def __init__(self, message: str = "Record already exists"):
        super().__init__(status.HTTP_409_CONFLICT, message)


class DuplicateEmailException(DuplicateEntryException):
    def __init__(self, message: str = "Email already in use"):
        super().__init__(message)
