"""Storage providers for counting results (JSON)."""

from .json_store import (
	deserialize_result,
	load_results,
	save_results,
	serialize_result,
)

__all__ = [
	"deserialize_result",
	"load_results",
	"save_results",
	"serialize_result",
]
