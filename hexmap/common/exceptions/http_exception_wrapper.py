from fastapi import HTTPException
from loguru import logger


def http_exception(status_code: int, msg: str, _input=None) -> HTTPException:
    logger.warning(f"{status_code}: {msg}")
    return HTTPException(
        status_code=status_code,
        detail={
            "msg": msg,
            "input": _input
        }
    )
