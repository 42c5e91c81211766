"""
Base class for challenge solvers.

Every solver runs the same linear flow: fetch the problem, compute the
answer, submit it. The first error ends the run; nothing is retried.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from hackattic.config import Settings, settings as default_settings
from hackattic.exceptions import ParseError
from hackattic.logging_config import get_logger
from hackattic.services.problem_service import ProblemClient


class ChallengeSolver(ABC):
    name: ClassVar[str]
    problem_model: ClassVar[type[BaseModel]]

    def __init__(self, problem_client: ProblemClient, settings: Settings | None = None) -> None:
        self.problem_client = problem_client
        self.settings = settings or default_settings
        self.logger = get_logger(__name__).bind(challenge=self.name)

    def parse_problem(self, raw: bytes) -> BaseModel:
        """Validate a fetched payload against this challenge's problem model."""
        try:
            return self.problem_model.model_validate_json(raw)
        except PydanticValidationError as e:
            self.logger.error("problem_parse_failed", errors=e.error_count())
            raise ParseError(f"Problem payload for {self.name!r} does not match schema: {e}") from e

    @abstractmethod
    def solve(self, problem) -> BaseModel:
        """Compute the solution payload for a parsed problem."""

    def run(self, access_token: str) -> bytes:
        """Fetch, solve and submit. Returns the platform's acknowledgement body."""
        raw = self.problem_client.fetch_problem(self.name, access_token)
        problem = self.parse_problem(raw)
        solution = self.solve(problem)
        self.logger.info("solution_computed")
        return self.problem_client.submit_solution(self.name, access_token, solution)
