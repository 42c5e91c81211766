from pydantic import BaseModel, ConfigDict, Field


class Pbkdf2Params(BaseModel):
    model_config = ConfigDict(frozen=True)

    rounds: int
    hash: str = "sha256"


class ScryptParams(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    n: int = Field(..., alias="N", description="CPU/memory cost")
    r: int = Field(..., description="Block size")
    p: int = Field(..., description="Parallelization")
    buflen: int = Field(..., description="Derived key length in bytes")
    control: str | None = Field(default=None, alias="_control")


class PasswordHashingProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    password: str
    salt: str = Field(..., description="Base64 encoded salt")
    pbkdf2: Pbkdf2Params
    scrypt: ScryptParams


class PasswordHashingSolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    sha256: str
    hmac: str
    pbkdf2: str
    scrypt: str
