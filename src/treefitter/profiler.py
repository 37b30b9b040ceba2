"""Performance profiler for conversion and query operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class OperationMetrics:
    """Performance metrics for a single operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    nodes_in: int
    nodes_out: int
    memory_start_mb: float
    memory_end_mb: float
    memory_peak_mb: float


class ProfileSession:
    """Handle yielded by ``profile_operation`` to report the output size."""

    def __init__(self):
        self.nodes_out = 0


class OperationProfiler:
    """
    Records duration and process memory for tree operations.

    Memory figures come from psutil and describe the whole process, so they
    are indicative rather than exact for small trees.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[OperationMetrics] = []

    @contextmanager
    def profile_operation(self, operation_name: str, nodes_in: int = 0):
        """
        Context manager for profiling an operation.

        Args:
            operation_name: Name of the operation being profiled
            nodes_in: Number of nodes in the input tree
        """
        session = ProfileSession()
        start_time = time.time()
        start_memory = self._current_memory_mb()
        self.logger.debug(f"Started profiling: {operation_name}")
        try:
            yield session
        finally:
            end_time = time.time()
            end_memory = self._current_memory_mb()
            metrics = OperationMetrics(
                operation_name=operation_name,
                start_time=start_time,
                end_time=end_time,
                duration=end_time - start_time,
                nodes_in=nodes_in,
                nodes_out=session.nodes_out,
                memory_start_mb=start_memory,
                memory_end_mb=end_memory,
                memory_peak_mb=max(start_memory, end_memory)
            )
            self.metrics_history.append(metrics)
            self.logger.debug(f"{operation_name}: {metrics.duration * 1000:.2f}ms, "
                              f"{nodes_in} -> {session.nodes_out} nodes, "
                              f"memory {end_memory:.1f} MB")

    def _current_memory_mb(self) -> float:
        """Resident set size of this process in MB."""
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0

    def get_summary(self) -> Dict[str, Any]:
        """
        Get summary of all recorded metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_nodes_in": sum(m.nodes_in for m in self.metrics_history),
            "total_nodes_out": sum(m.nodes_out for m in self.metrics_history),
            "max_memory_peak_mb": max(m.memory_peak_mb for m in self.metrics_history),
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "nodes_in": m.nodes_in,
                    "nodes_out": m.nodes_out,
                    "memory_peak": m.memory_peak_mb
                }
                for m in self.metrics_history
            ]
        }

    def format_summary(self) -> str:
        """Render the summary as human-readable lines."""
        summary = self.get_summary()
        if summary["total_operations"] == 0:
            return "Performance Summary: no operations recorded"
        lines = [
            "Performance Summary:",
            f"  Total Operations: {summary['total_operations']}",
            f"  Total Duration: {summary['total_duration'] * 1000:.2f}ms",
            f"  Nodes In/Out: {summary['total_nodes_in']}/{summary['total_nodes_out']}",
            f"  Memory Peak: {summary['max_memory_peak_mb']:.1f} MB"
        ]
        return "\n".join(lines)
