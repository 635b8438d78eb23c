from fastapi import HTTPException
from typing import Any, NoReturn, Optional

def ok(data: Any = None, **extra):
    return {"ok": True, "data": data, **extra}

def err(message: str, code: str = "bad_request", status: int = 400, details: Optional[Any] = None) -> NoReturn:
    # raises; routes write `return err(...)` so the exit point reads clearly
    raise HTTPException(status_code=status, detail={"ok": False, "error": {"code": code, "message": message, "details": details}})
