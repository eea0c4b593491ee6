"""
Output Manager — where the arbor-sp command writes its results.

Each CLI run writes into its own folder under the output directory, named
YYYYMMDD_HHMM_{label} (e.g. "20261018_1430_graph_peer_12"). Graph commands
save the PNG there; find/get commands save the records as JSON together with
a run_results.json describing the call and any error.

Folders older than retention_days are removed at start-up. Set
retention_days=0 to keep everything.
"""

import json
import os
import re
import shutil
from datetime import datetime, timedelta
from typing import Any, Optional

RUN_FOLDER = re.compile(r"^\d{8}_\d{4}_")


def safe_label(label: str) -> str:
    """Reduce ``label`` to characters that are safe in a folder name."""
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in label)


def run_folder_time(name: str) -> Optional[datetime]:
    """Timestamp encoded in a run folder name, or None for any other name."""
    if not RUN_FOLDER.match(name):
        return None
    try:
        return datetime.strptime(name[:13], "%Y%m%d_%H%M")
    except ValueError:
        return None


class OutputManager:
    """Timestamped result folders with a retention policy.

    Attributes:
        base_dir: Root output directory.
        retention_days: Age in days after which folders are deleted.
        current_dir: This run's folder, None until create_run_dir() is called.
    """

    def __init__(self, base_dir: str, retention_days: int = 30):
        self.base_dir = base_dir
        self.retention_days = retention_days
        self.current_dir: Optional[str] = None
        self._run_timestamp = datetime.now()

    def create_run_dir(self, label: str) -> str:
        timestamp = self._run_timestamp.strftime("%Y%m%d_%H%M")
        self.current_dir = os.path.join(self.base_dir, f"{timestamp}_{safe_label(label)}")
        os.makedirs(self.current_dir, exist_ok=True)
        return self.current_dir

    def cleanup_old_folders(self, debug: bool = False) -> int:
        """Delete run folders older than retention_days; returns how many went.

        Names that do not start with a valid timestamp are never touched.
        """
        if self.retention_days <= 0 or not os.path.isdir(self.base_dir):
            return 0

        cutoff = datetime.now() - timedelta(days=self.retention_days)
        expired = []
        for name in sorted(os.listdir(self.base_dir)):
            created = run_folder_time(name)
            path = os.path.join(self.base_dir, name)
            if created is not None and created < cutoff and os.path.isdir(path):
                expired.append(path)

        for path in expired:
            shutil.rmtree(path)
            if debug:
                print(f"  Removed {os.path.basename(path)} (older than {self.retention_days} days)")
        return len(expired)

    def get_output_path(self, filename: str) -> str:
        """Resolve ``filename`` inside this run's folder.

        Raises:
            RuntimeError: If create_run_dir() has not been called yet.
        """
        if not self.current_dir:
            raise RuntimeError("Output directory not created. Call create_run_dir() first.")
        return os.path.join(self.current_dir, filename)

    def save_json(self, filename: str, data: Any) -> str:
        path = self.get_output_path(filename)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
        return path

    def save_bytes(self, filename: str, data: bytes) -> str:
        path = self.get_output_path(filename)
        with open(path, "wb") as f:
            f.write(data)
        return path
