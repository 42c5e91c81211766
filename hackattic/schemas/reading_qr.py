from pydantic import BaseModel, ConfigDict


class ReadingQrProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_url: str


class ReadingQrSolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
