"""Domain layer for churchregister application."""

# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
_SERVICES = {
    "StatementParser": "churchregister.domain.statement_parser",
    "TransactionImportService": "churchregister.domain.transaction_import",
    "ContributionMatchingService": "churchregister.domain.contribution_matching",
    "StatementUploadService": "churchregister.domain.statement_upload",
    "MemberService": "churchregister.domain.member",
    "ContributionService": "churchregister.domain.contribution",
    "extract_reference": "churchregister.domain.reference",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
