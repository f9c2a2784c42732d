from pydantic import BaseModel
from typing import Any, Generic, TypeVar, Optional
from .error_code import Code
from .env import LOG

T = TypeVar("T")


class Error(BaseModel):
    status: Code = Code.SUCCESS
    errmsg: str = ""
    detail: str = ""
    # the transport exception or sniffer failure, passed through untouched
    cause: Any = None

    @classmethod
    def init(
        cls, status: Code, errmsg: str, *, detail: str = "", cause: Any = None
    ) -> "Error":
        return cls(status=status, errmsg=errmsg, detail=detail, cause=cause)

    def __str__(self) -> str:
        if self.detail:
            return f"Error(status={self.status.value}, errmsg={self.errmsg}, detail={self.detail})"
        return f"Error(status={self.status.value}, errmsg={self.errmsg})"


class Result(BaseModel, Generic[T]):
    data: Optional[T]
    error: Error

    @classmethod
    def resolve(cls, data: T) -> "Result[T]":
        return cls(data=data, error=Error())

    @classmethod
    def reject(
        cls,
        errmsg: str,
        status: Code = Code.MALFORMED_PAYLOAD,
        *,
        detail: str = "",
        cause: Any = None,
    ) -> "Result[T]":
        assert status != Code.SUCCESS, "status must not be SUCCESS"
        LOG.warning(f"[{status.value}]: {errmsg} {detail}".rstrip())
        return cls(data=None, error=Error.init(status, errmsg, detail=detail, cause=cause))

    def unpack(self) -> tuple[Optional[T], Optional[Error]]:
        if self.error.status != Code.SUCCESS:
            return None, self.error
        return self.data, None

    def ok(self) -> bool:
        if self.error.status != Code.SUCCESS:
            return False
        return True
