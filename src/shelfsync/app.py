"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.adapters.bgg import build_bgg_registry
from shelfsync.adapters.html import load_fragment, render_document, write_export
from shelfsync.adapters.notion import build_notion_workspace
from shelfsync.config import get_export_config
from shelfsync.domain.export import ExportLayout, build_export
from shelfsync.domain.hierarchy import hierarchy_problems
from shelfsync.domain.reconcile import load_catalog, reconcile_catalog

if TYPE_CHECKING:
    from pathlib import Path

    from shelfsync.adapters.bgg import BggRegistry
    from shelfsync.adapters.notion import NotionWorkspace
    from shelfsync.config import ExportConfig
    from shelfsync.domain.catalog import CatalogIndex
    from shelfsync.domain.ports import GameRegistry, RecordSink, RecordSource
    from shelfsync.domain.reconcile import ReconcileResult, TraceHook


log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def sync_catalog(
    *,
    source: RecordSource | None = None,
    sink: RecordSink | None = None,
    registry: GameRegistry | None = None,
    limit: int | None = None,
    trace: TraceHook | None = None,
) -> tuple[CatalogIndex, ReconcileResult]:
    """Match and fill the workspace catalog using the configured adapters.

    Adapters that are not injected are built from the environment and closed
    once the pass is over. Returns the index so callers can export from the
    same snapshot.
    """

    owned: list[NotionWorkspace | BggRegistry] = []
    if source is None or sink is None:
        workspace = build_notion_workspace()
        owned.append(workspace)
        source = source or workspace
        sink = sink or workspace
    if registry is None:
        registry = build_bgg_registry()
        owned.append(registry)

    stamp = _utcnow()
    log.info("Starting catalog sync: limit=%s, stamp=%s", limit, stamp.isoformat())
    try:
        index = load_catalog(source, trace=trace)
        result = reconcile_catalog(
            index,
            registry=registry,
            sink=sink,
            stamp=stamp,
            limit=limit,
            trace=trace,
        )
    finally:
        for adapter in owned:
            adapter.close()

    matches = ", ".join(f"{outcome}={count}" for outcome, count in result.match_counts.items())
    syncs = ", ".join(f"{outcome}={count}" for outcome, count in result.sync_counts.items())
    log.info(
        "Finished catalog sync: listed=%d, matches=[%s], syncs=[%s]",
        result.listed,
        matches,
        syncs,
    )
    return index, result


def export_catalog(
    *,
    index: CatalogIndex | None = None,
    source: RecordSource | None = None,
    config: ExportConfig | None = None,
    output_path: Path | None = None,
    header_path: Path | None = None,
    footer_path: Path | None = None,
) -> bool:
    """Render the catalog to the export file; returns whether it was written."""

    effective_config = config or get_export_config()
    overrides: dict[str, Path] = {}
    if output_path is not None:
        overrides["output_path"] = output_path
    if header_path is not None:
        overrides["header_path"] = header_path
    if footer_path is not None:
        overrides["footer_path"] = footer_path
    if overrides:
        effective_config = replace(effective_config, **overrides)

    if index is None:
        index = _load_index(source)

    problems = hierarchy_problems(index)
    if problems.orphans:
        log.info("%d expansions have no parent in the catalog", len(problems.orphans))

    layout = ExportLayout(
        categories=effective_config.categories,
        default_category=effective_config.default_category,
    )
    document = build_export(index, layout)
    text = render_document(
        document,
        header=load_fragment(effective_config.header_path),
        footer=load_fragment(effective_config.footer_path),
    )
    return write_export(text, effective_config.output_path)


def run_catalog(
    *,
    limit: int | None = None,
    trace: TraceHook | None = None,
    config: ExportConfig | None = None,
) -> bool:
    """Sync the catalog, then export it from the same in-memory snapshot."""

    index, _ = sync_catalog(limit=limit, trace=trace)
    return export_catalog(index=index, config=config)


def _load_index(source: RecordSource | None) -> CatalogIndex:
    if source is not None:
        return load_catalog(source)
    workspace = build_notion_workspace()
    try:
        return load_catalog(workspace)
    finally:
        workspace.close()
