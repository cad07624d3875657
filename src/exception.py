# src/exception.py
from fastapi import HTTPException

ServerErrorException = lambda detail="Something went wrong": HTTPException(status_code=500, detail=detail)
