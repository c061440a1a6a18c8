"""Configuration constants.

Protocol values fixed by the ingestion service. These are NOT user-configurable.
For configurable values, see models.py.
"""

DEFAULT_ENDPOINT = "https://coveralls.io/api/v1/jobs"
"""Jobs endpoint of the coverage ingestion service."""

UPLOAD_FIELD_NAME = "json_file"
"""Multipart form field that carries the serialized report."""

UPLOAD_FILE_NAME = "coverage.json"

REPO_CONFIG_NAME = ".covwire.yml"
"""Per-repository YAML config, looked up at the repository root."""

COVERALLS_CONFIG_NAME = ".coveralls.yml"
"""Legacy per-repository file that may carry a ``repo_token``."""

REPO_TOKEN_ENV = "COVERALLS_REPO_TOKEN"
