# api/_resp.py
from fastapi import HTTPException
from pydantic import BaseModel


def ok(data: BaseModel | dict | list | float | None = None, **extras):
    payload = {"status": "success"}
    if isinstance(data, BaseModel):
        data = data.model_dump()
    payload["data"] = data
    if extras:
        payload.update(extras)
    return payload


def fail(status: int, message: str):
    raise HTTPException(status, detail={"status": "error", "message": message})
