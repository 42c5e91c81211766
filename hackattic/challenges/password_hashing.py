"""
password_hashing: hash one password four ways.

SHA-256, HMAC-SHA256 keyed with the salt, PBKDF2 and scrypt, each
hex encoded. Cost parameters come from the problem, so they are checked
before any work starts.
"""

import base64
import binascii
import hashlib
import hmac

from hackattic.challenges.base import ChallengeSolver
from hackattic.config import Settings
from hackattic.exceptions import ComputeError
from hackattic.schemas.password_hashing import (
    PasswordHashingProblem,
    PasswordHashingSolution,
    ScryptParams,
)
from hackattic.services.problem_service import ProblemClient

PBKDF2_KEY_LENGTH = 32
# CPython refuses a maxmem at or above INT_MAX
SCRYPT_MAXMEM_LIMIT = 2**31 - 1
SCRYPT_MAXMEM_HEADROOM = 1024 * 1024


def decode_salt(salt: str) -> bytes:
    try:
        return base64.b64decode(salt, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ComputeError(f"Salt is not valid base64: {e}") from e


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hmac_sha256_hex(data: bytes, key: bytes) -> str:
    return hmac.new(key, data, hashlib.sha256).hexdigest()


def pbkdf2_hex(data: bytes, salt: bytes, rounds: int, hash_name: str = "sha256") -> str:
    if rounds < 1:
        raise ComputeError(f"PBKDF2 rounds must be positive, got {rounds}")
    try:
        key = hashlib.pbkdf2_hmac(hash_name, data, salt, rounds, dklen=PBKDF2_KEY_LENGTH)
    except (ValueError, OverflowError) as e:
        raise ComputeError(f"PBKDF2 failed ({hash_name}, rounds={rounds}): {e}") from e
    return key.hex()


def scrypt_memory_required(n: int, r: int, p: int) -> int:
    """Bytes scrypt needs for the given parameters (working buffer plus V array)."""
    return 128 * r * (n + p + 2)


def scrypt_hex(
    data: bytes,
    salt: bytes,
    params: ScryptParams,
    max_memory: int = SCRYPT_MAXMEM_LIMIT,
) -> str:
    n, r, p, buflen = params.n, params.r, params.p, params.buflen
    if n < 2 or n & (n - 1):
        raise ComputeError(f"scrypt N must be a power of two greater than 1, got {n}")
    if r < 1 or p < 1 or buflen < 1:
        raise ComputeError(
            f"scrypt r, p and buflen must be positive, got r={r} p={p} buflen={buflen}"
        )

    limit = min(max_memory, SCRYPT_MAXMEM_LIMIT)
    required = scrypt_memory_required(n, r, p)
    if required > limit:
        raise ComputeError(f"scrypt needs {required} bytes, limit is {limit}")

    try:
        key = hashlib.scrypt(
            data,
            salt=salt,
            n=n,
            r=r,
            p=p,
            maxmem=min(required + SCRYPT_MAXMEM_HEADROOM, limit),
            dklen=buflen,
        )
    except (ValueError, OverflowError, MemoryError) as e:
        raise ComputeError(f"scrypt failed (N={n}, r={r}, p={p}): {e}") from e
    return key.hex()


def hash_password(
    problem: PasswordHashingProblem, scrypt_max_memory: int = SCRYPT_MAXMEM_LIMIT
) -> PasswordHashingSolution:
    password = problem.password.encode()
    salt = decode_salt(problem.salt)

    return PasswordHashingSolution(
        sha256=sha256_hex(password),
        hmac=hmac_sha256_hex(password, salt),
        pbkdf2=pbkdf2_hex(password, salt, problem.pbkdf2.rounds, problem.pbkdf2.hash),
        scrypt=scrypt_hex(password, salt, problem.scrypt, scrypt_max_memory),
    )


class PasswordHashingSolver(ChallengeSolver):
    name = "password_hashing"
    problem_model = PasswordHashingProblem

    def __init__(
        self,
        problem_client: ProblemClient,
        settings: Settings | None = None,
        scrypt_max_memory: int | None = None,
    ):
        super().__init__(problem_client, settings)
        if scrypt_max_memory is None:
            scrypt_max_memory = self.settings.scrypt_max_memory
        self.scrypt_max_memory = scrypt_max_memory

    def solve(self, problem: PasswordHashingProblem) -> PasswordHashingSolution:
        self.logger.info(
            "hashing_password",
            pbkdf2_rounds=problem.pbkdf2.rounds,
            scrypt_n=problem.scrypt.n,
            scrypt_r=problem.scrypt.r,
            scrypt_p=problem.scrypt.p,
        )
        return hash_password(problem, self.scrypt_max_memory)
