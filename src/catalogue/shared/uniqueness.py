"""Case-insensitive name uniqueness for catalogue aggregates."""

from contextlib import contextmanager

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.shared.slug import name_key
from shared.errors import ConflictError


def name_is_taken(aggregate_cls, name, exclude_id=None) -> bool:
    """True when another record of ``aggregate_cls`` already uses ``name``.

    Comparison is an exact match on the normalized name, so "Shoes" and
    "shoes" collide while "Shoe" and "Shoes" do not.
    """
    repo = current_domain.repository_for(aggregate_cls)
    query = repo._dao.query.filter(name_key=name_key(name))
    if exclude_id is not None:
        query = query.exclude(id=exclude_id)
    return query.all().total > 0


def ensure_name_available(aggregate_cls, name, exclude_id=None, label=None) -> None:
    if name_is_taken(aggregate_cls, name, exclude_id=exclude_id):
        raise ConflictError(f"{label or aggregate_cls.__name__} already exists")


@contextmanager
def unique_name_guard(aggregate_cls, label=None):
    """Turn a storage-level unique violation on ``name_key`` into a conflict.

    Covers the window between ``ensure_name_available`` and the write, where a
    concurrent request may have claimed the same name.
    """
    try:
        yield
    except ValidationError as exc:
        messages = getattr(exc, "messages", None) or {}
        if "name_key" in messages:
            raise ConflictError(f"{label or aggregate_cls.__name__} already exists") from exc
        raise


def add_with_unique_name(repo, aggregate, label=None) -> None:
    """Persist ``aggregate`` under ``unique_name_guard``.

    Storage enforces unique fields only on insert, so updates are checked
    against it here, immediately before the write.
    """
    with unique_name_guard(type(aggregate), label=label):
        if aggregate.state_.is_persisted:
            repo._dao._validate_unique(aggregate, create=False)
        repo.add(aggregate)
