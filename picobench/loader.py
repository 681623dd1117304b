"""
Loader for benchmark files.

A benchmark file is a regular Python module. It either defines a hook

    def register_benchmarks(registry):
        registry.register_benchmark("append", bench_append)

or builds its own module-level Registry, which is merged into the target
registry after import.
"""

import hashlib
import logging
import importlib.util
from pathlib import Path
from typing import List, Optional, Union

from .benchmark.registry import Registry
from .config import Config
from .exceptions import BenchmarkLoadError

logger = logging.getLogger(__name__)

HOOK_NAME = "register_benchmarks"


class BenchmarkLoader:
    """
    Discover benchmark files and register their benchmarks.

    Example:
        registry = Registry()
        loader = BenchmarkLoader(registry)
        loader.load("benchmarks/")
        report = BenchmarkRunner(registry).run()
    """

    def __init__(self, registry: Registry, pattern: Optional[str] = None):
        """
        Initialize benchmark loader.

        Args:
            registry: Registry benchmarks are added to
            pattern: Glob used when loading a directory (default: Config.PATTERN)
        """
        self.registry = registry
        self.pattern = pattern or Config.PATTERN

    def discover(self, path: Union[str, Path]) -> List[Path]:
        """
        List benchmark files under a path.

        Args:
            path: A benchmark file or a directory searched recursively

        Returns:
            Sorted list of files

        Raises:
            FileNotFoundError: If the path doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Benchmark path not found: {path}")

        if path.is_file():
            return [path]
        return sorted(p for p in path.rglob(self.pattern) if p.is_file())

    def load(self, path: Union[str, Path]) -> List[str]:
        """
        Import every benchmark file under a path.

        Args:
            path: A benchmark file or a directory

        Returns:
            Names of the imported modules
        """
        loaded = []
        for file in self.discover(path):
            loaded.append(self.load_file(file))

        logger.info(f"Loaded {len(loaded)} benchmark files from {path}, {len(self.registry)} benchmarks total")
        return loaded

    def load_file(self, file: Path) -> str:
        """
        Import one benchmark file and register its benchmarks.

        Raises:
            BenchmarkLoadError: If the module can't be imported or its hook fails
        """
        file = Path(file).resolve()
        # Unique per path so same-named files in different folders don't clash
        digest = hashlib.sha1(str(file).encode("utf-8")).hexdigest()[:8]
        module_name = f"picobench_user_{file.stem}_{digest}"

        spec = importlib.util.spec_from_file_location(module_name, file)
        if spec is None or spec.loader is None:
            raise BenchmarkLoadError(str(file), "not a Python module")

        module = importlib.util.module_from_spec(spec)
        before = len(self.registry)

        try:
            spec.loader.exec_module(module)

            hook = getattr(module, HOOK_NAME, None)
            if callable(hook):
                # Each file starts in the unnamed suite of its own registry
                scratch = Registry()
                hook(scratch)
                self.registry.merge(scratch)
            else:
                for value in list(vars(module).values()):
                    if isinstance(value, Registry) and value is not self.registry:
                        self.registry.merge(value)
        except Exception as e:
            raise BenchmarkLoadError(str(file), f"{type(e).__name__}: {e}") from e

        added = len(self.registry) - before
        if not added:
            logger.warning(f"No benchmarks registered by {file}")
        logger.debug(f"{file}: {added} benchmarks")
        return module_name
