"""Entry points for the deduplication pipeline."""

from __future__ import annotations

from pathlib import Path

from company_dedup.config.settings import Settings, get_settings
from company_dedup.utils.logging import get_logger, log_timing, logging_context

from .io import generate_groups_payload, load_company_names, write_groups
from .processor import DeduplicationProcessor, DeduplicationResult


_LOGGER = get_logger(module=__name__)


def deduplicate_names(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    threshold: float | None = None,
    settings: Settings | None = None,
) -> DeduplicationResult:
    """Load names from *input_path*, group them, and optionally write JSON.

    *threshold* overrides the configured grouping threshold for this run.  A
    relative *output_path* is placed under ``settings.paths.output_dir``.
    """

    cfg = settings or get_settings()
    policy = cfg.policies.grouping
    if threshold is not None:
        policy = policy.model_copy(update={"threshold": threshold})
    processor = DeduplicationProcessor(policy)

    source = Path(input_path).expanduser().resolve()
    names = load_company_names(source)
    _LOGGER.info("Loaded companies", count=len(names), source=str(source))

    with logging_context(stage="dedup"), log_timing("deduplication", logger_=_LOGGER):
        result = processor.process(names)

    if output_path is None:
        return result

    config_snapshot = {
        "policy_version": str(cfg.policies.policy_version),
        "threshold": result.stats.get("threshold"),
        "extra_noise_words": list(policy.extra_noise_words),
        "source": str(source),
    }
    payload = generate_groups_payload(result.groups, result.stats, config_snapshot)
    destination = write_groups(payload, cfg.paths.resolve_output(output_path))
    _LOGGER.info("Deduplication output written", path=str(destination), groups=len(result.groups))
    return result


__all__ = ["deduplicate_names"]
