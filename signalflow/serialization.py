"""Graph snapshot persistence in a JSON key-value store file.

The store is a single JSON object mapping keys to string blobs, so several
snapshots (or other settings) can share one file. The flow graph lives under
``defaults.STORAGE_KEY``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from signalflow import defaults
from signalflow.errors import GraphLoadError, GraphSaveError, SignalflowError
from signalflow.flow.graph import FlowGraph

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


@dataclass
class GraphSnapshot:
    graph: FlowGraph
    source: str | None = None
    sink: str | None = None
    saved_at: str = ""


def save_graph(
    store_path: str | Path,
    graph: FlowGraph,
    source: str | None = None,
    sink: str | None = None,
    key: str = defaults.STORAGE_KEY,
) -> None:
    """Write a snapshot of the graph under ``key``, keeping other keys intact.

    Raises:
        GraphSaveError: If the store is unreadable or cannot be written
    """
    store_path = Path(store_path)
    try:
        store = _read_store(store_path) if store_path.exists() else {}
    except GraphLoadError as e:
        raise GraphSaveError(f"Refusing to overwrite unreadable store {store_path}: {e}") from e

    blob = {
        'schema_version': SCHEMA_VERSION,
        'saved_at': datetime.now().isoformat(),
        'source': source,
        'sink': sink,
        'graph': graph_to_dict(graph),
    }
    store[key] = json.dumps(blob)

    try:
        store_path.parent.mkdir(parents=True, exist_ok=True)
        # Write-then-rename so a failed write never truncates the previous store
        fd, tmp_name = tempfile.mkstemp(dir=store_path.parent, suffix='.tmp')
    except OSError as e:
        raise GraphSaveError(f"Could not write {store_path}: {e}") from e
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(store, f, indent=2)
        os.replace(tmp_name, store_path)
    except (OSError, TypeError, ValueError) as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise GraphSaveError(f"Could not write {store_path}: {e}") from e
    logger.debug("Saved graph (%d nodes, %d edges) to %s[%s]",
                 len(graph.nodes), len(graph.edges), store_path, key)


def load_graph(store_path: str | Path, key: str = defaults.STORAGE_KEY) -> GraphSnapshot | None:
    """Read the snapshot stored under ``key``.

    Returns:
        The snapshot, or None when the store or key does not exist

    Raises:
        GraphLoadError: If the store or snapshot is corrupt
    """
    store_path = Path(store_path)
    if not store_path.exists():
        return None

    store = _read_store(store_path)
    blob = store.get(key)
    if blob is None:
        return None

    try:
        data = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as e:
        raise GraphLoadError(f"Corrupt graph snapshot under {key!r}: {e}")

    schema_version = data.get('schema_version', '0') if isinstance(data, dict) else None
    if schema_version != SCHEMA_VERSION:
        raise GraphLoadError(f"Snapshot schema version {schema_version} not supported. Expected {SCHEMA_VERSION}.")

    try:
        graph = dict_to_graph(data['graph'])
        return GraphSnapshot(
            graph=graph,
            source=data.get('source'),
            sink=data.get('sink'),
            saved_at=data.get('saved_at', ''),
        )
    except (KeyError, TypeError, ValueError, SignalflowError) as e:
        raise GraphLoadError(f"Invalid graph snapshot: {e}") from e


def _read_store(store_path: Path) -> dict[str, Any]:
    try:
        with open(store_path, 'r', encoding='utf-8') as f:
            store = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise GraphLoadError(f"Corrupt store file {store_path}: {e}")
    except OSError as e:
        raise GraphLoadError(f"Could not read {store_path}: {e}")
    if not isinstance(store, dict):
        raise GraphLoadError(f"Store file {store_path} does not contain a key-value object")
    return store


# ============================================================================
# Conversion helpers
# ============================================================================

def graph_to_dict(graph: FlowGraph) -> dict[str, Any]:
    """Convert FlowGraph to a JSON-serializable dict."""
    return {
        'nodes': graph.nodes,
        'edges': [
            {
                'id': edge.id,
                'source': edge.source,
                'target': edge.target,
                'capacity': edge.capacity,
                'flow': edge.flow,
            }
            for edge in graph.edges
        ],
    }


def dict_to_graph(data: dict[str, Any]) -> FlowGraph:
    """Reconstruct FlowGraph from dict."""
    graph = FlowGraph(nodes=data['nodes'])
    for edge in data['edges']:
        graph.add_edge(edge['id'], edge['source'], edge['target'], edge['capacity'], flow=edge.get('flow', 0))
    return graph
