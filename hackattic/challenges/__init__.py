from hackattic.challenges.base import ChallengeSolver
from hackattic.challenges.password_hashing import PasswordHashingSolver
from hackattic.challenges.reading_qr import ReadingQrSolver

SOLVERS: dict[str, type[ChallengeSolver]] = {
    solver.name: solver for solver in (PasswordHashingSolver, ReadingQrSolver)
}


def get_solver(name: str) -> type[ChallengeSolver]:
    """Look up a solver class by challenge name."""
    try:
        return SOLVERS[name]
    except KeyError:
        raise KeyError(f"Unknown challenge: {name}") from None


__all__ = [
    "SOLVERS",
    "ChallengeSolver",
    "PasswordHashingSolver",
    "ReadingQrSolver",
    "get_solver",
]
