import csv
import os
from typing import Any, Dict, List, Optional

from .log_config import setup_logging

logger = setup_logging(logger_name="CsvWriter", level="INFO", color="green")


class CsvWriter:
    """
    Write rows of frame data to a CSV file.

    The header is taken from the keys of the first row written. An existing file with
    the same name is overwritten.
    """

    def __init__(self, filename: str):
        """
        Initialize the CsvWriter.

        Args:
            filename (str): The name of the CSV file to write to.
        """
        self.filename = filename
        self.csv_file = None
        self.csv_writer = None
        self.fieldnames: Optional[List[str]] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self):
        """Open the CSV file for writing, creating parent folders as needed."""
        folder = os.path.dirname(self.filename)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self.csv_file = open(self.filename, "w", newline="")
        self.fieldnames = None

    def _ensure_writer(self, row: Dict[str, Any]):
        if not self.csv_file or self.csv_file.closed:
            raise IOError("CSV file is not open for writing.")

        if self.csv_writer is None:
            self.fieldnames = list(row.keys())
            self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=self.fieldnames)
            self.csv_writer.writeheader()

    def write(self, data: Dict[str, Any]):
        """
        Write a single row.

        Args:
            data (Dict[str, Any]): Column name to value.

        Raises:
            IOError: If the file is not open for writing.
            ValueError: If the row has columns the header does not.
        """
        self._ensure_writer(data)
        self.csv_writer.writerow(data)

    def write_rows(self, data: List[Dict[str, Any]]):
        """
        Write multiple rows.

        Args:
            data (List[Dict[str, Any]]): Rows, all sharing the first row's columns.

        Raises:
            IOError: If the file is not open for writing.
        """
        if not data:
            return

        self._ensure_writer(data[0])
        self.csv_writer.writerows(data)
        self.csv_file.flush()

    def close(self):
        """Close the CSV file."""
        if self.csv_file and not self.csv_file.closed:
            self.csv_file.close()
        self.csv_writer = None


def animation_data_filename(label: str, frame_rate: float, width: int, height: int) -> str:
    """File name used for the data behind an animation, e.g. ANIM_from_model_60fps_1280x1024.csv."""
    return f"ANIM_from_{label}_{frame_rate:g}fps_{width}x{height}.csv"


def export_model(result, filename: str, correction: Optional[float] = None) -> str:
    """
    Export the frames of a model result to CSV.

    Args:
        result (ModelResult): The model to export.
        filename (str): Destination file.
        correction (float, optional): Display correction factor. When given, a
            ``diam_on_screen_corrected`` column holds the diameters used for drawing.

    Returns:
        str: The file written.
    """
    rows = result.to_rows()
    if correction is not None:
        for row in rows:
            row["diam_on_screen_corrected"] = row["diam_on_screen"] * correction

    with CsvWriter(filename) as writer:
        writer.write_rows(rows)

    logger.info(f"Wrote {len(rows)} frames to {filename}")
    return filename
