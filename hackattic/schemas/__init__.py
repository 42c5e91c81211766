from hackattic.schemas.password_hashing import (
    PasswordHashingProblem,
    PasswordHashingSolution,
    Pbkdf2Params,
    ScryptParams,
)
from hackattic.schemas.reading_qr import ReadingQrProblem, ReadingQrSolution

__all__ = [
    "PasswordHashingProblem",
    "PasswordHashingSolution",
    "Pbkdf2Params",
    "ReadingQrProblem",
    "ReadingQrSolution",
    "ScryptParams",
]
