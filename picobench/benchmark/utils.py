"""
Utility functions for benchmark module.
Separated to avoid circular imports.
"""

import os
import socket
import platform
from datetime import datetime
from typing import Dict


def get_machine_info() -> Dict[str, str]:
    """
    Get machine information for report context.

    Returns:
        Dictionary with machine details including:
        - hostname: Machine hostname
        - platform: OS platform info
        - machine: CPU architecture
        - processor: Processor description (may be empty on some systems)
        - cpu_count: Number of logical CPUs
        - python: Interpreter implementation and version
    """
    return {
        "hostname": socket.gethostname(),
        "platform": f"{platform.system()} {platform.release()}",
        "machine": platform.machine() or "unknown",
        "processor": platform.processor() or "unknown",
        "cpu_count": str(os.cpu_count() or "unknown"),
        "python": f"{platform.python_implementation()} {platform.python_version()}",
    }


def get_report_subdir_name() -> str:
    """
    Generate report subdirectory name based on date and hostname.

    Format: YYYYMMDD_hostname
    Example: 20251224_build-box-01

    Returns:
        Subdirectory name string
    """
    date_str = datetime.now().strftime("%Y%m%d")
    hostname = socket.gethostname().replace("_", "-") or "localhost"

    return f"{date_str}_{hostname}"
