import json
import os
from datetime import datetime, timezone


class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="utm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        if not entries:
            return
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_snapshot(self, snapshot, run_id=None):
        """Log one reporter snapshot (step or final configuration)."""
        entry = {"event": "final" if snapshot.final else "step", "run_id": run_id}
        entry.update(snapshot.to_dict())
        self.log(entry)

    def log_run(self, result, program, word, codec_name):
        """Log the outcome of a complete run."""
        entry = {
            "event": "run",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "program": program,
            "input": word,
            "codec": codec_name,
        }
        entry.update(result.to_dict())
        self.log(entry)

    def log_halting(self, entries: list):
        """Log results of inputs on which the machine halted."""
        filename = f"halting_{self.today}.jsonl"
        self._log_to_file(filename, entries)

    def log_non_halting(self, entries: list):
        """Log results of inputs that hit the step cap."""
        filename = f"non_halting_{self.today}.jsonl"
        self._log_to_file(filename, entries)
