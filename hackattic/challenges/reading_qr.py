"""reading_qr: download a rotated QR code image and return the text it encodes."""

import tempfile
from pathlib import Path

import zxingcpp
from PIL import Image, UnidentifiedImageError

from hackattic.challenges.base import ChallengeSolver
from hackattic.exceptions import ComputeError
from hackattic.schemas.reading_qr import ReadingQrProblem, ReadingQrSolution

QR_FILE_NAME = "rotated_qr.png"


def read_rotated_qr(path: str | Path) -> str:
    """
    Decode the QR code in an image file.

    The decoder searches all rotations and downscaled copies of the image,
    which tolerates skewed and noisy codes at the cost of speed.
    """
    try:
        with Image.open(path) as image:
            grayscale = image.convert("L")
    except (UnidentifiedImageError, OSError) as e:
        raise ComputeError(f"Cannot read image {path}: {e}") from e

    result = zxingcpp.read_barcode(
        grayscale,
        formats=zxingcpp.BarcodeFormat.QRCode,
        try_rotate=True,
        try_downscale=True,
    )
    if result is None or not result.valid:
        raise ComputeError(f"No readable QR code in {path}")
    return result.text


class ReadingQrSolver(ChallengeSolver):
    name = "reading_qr"
    problem_model = ReadingQrProblem

    def solve(self, problem: ReadingQrProblem) -> ReadingQrSolution:
        with tempfile.TemporaryDirectory(prefix="hackattic-") as workdir:
            image_path = Path(workdir) / QR_FILE_NAME
            self.problem_client.download_file(image_path, problem.image_url)
            code = read_rotated_qr(image_path)

        self.logger.info("qr_code_decoded", code=code)
        return ReadingQrSolution(code=code)
