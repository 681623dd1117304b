"""
Configuration management for picobench.
Loads defaults from environment variables and the working directory's .env file.
"""

import os
from pathlib import Path
from typing import List, Tuple
from dotenv import load_dotenv

# Load .env file from the directory benchmarks are launched from
load_dotenv(Path.cwd() / ".env")

# Default workload sizes (iterations per sample) and samples per workload size
DEFAULT_ITERATIONS: Tuple[int, ...] = (8, 64, 512, 4096, 8196)
DEFAULT_SAMPLES: int = 1


class Config:
    """Central configuration management."""

    # ==========================================================================
    # Runner Defaults
    # ==========================================================================
    ITERATIONS: str = os.getenv("PICOBENCH_ITERATIONS", ",".join(str(i) for i in DEFAULT_ITERATIONS))
    SAMPLES: int = int(os.getenv("PICOBENCH_SAMPLES", str(DEFAULT_SAMPLES)))
    SEED: int = int(os.getenv("PICOBENCH_SEED", "-1"))

    # ==========================================================================
    # Discovery & Output
    # ==========================================================================
    PATTERN: str = os.getenv("PICOBENCH_PATTERN", "bench_*.py")
    REPORT_DIR: Path = Path.cwd() / os.getenv("PICOBENCH_REPORT_DIR", "reports")

    @staticmethod
    def parse_iterations(text: str) -> List[int]:
        """
        Parse a comma-separated list of workload sizes.

        Args:
            text: Value such as "8,64,512"

        Returns:
            List of positive integers in the given order

        Raises:
            ValueError: If an entry is not a positive integer
        """
        sizes = []
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            value = int(part)
            if value <= 0:
                raise ValueError(f"Iteration count must be positive, got {value}")
            sizes.append(value)

        if not sizes:
            raise ValueError(f"No iteration counts in {text!r}")
        return sizes

    @classmethod
    def default_iterations(cls) -> List[int]:
        """Default workload sizes, honoring PICOBENCH_ITERATIONS."""
        return cls.parse_iterations(cls.ITERATIONS)

    @classmethod
    def default_samples(cls) -> int:
        """
        Default samples per workload size, honoring PICOBENCH_SAMPLES.

        Raises:
            ValueError: If the configured count is not positive
        """
        if cls.SAMPLES <= 0:
            raise ValueError(f"PICOBENCH_SAMPLES must be positive, got {cls.SAMPLES}")
        return cls.SAMPLES

    @classmethod
    def ensure_directories(cls):
        """Create output directories if they don't exist."""
        cls.REPORT_DIR.mkdir(parents=True, exist_ok=True)
