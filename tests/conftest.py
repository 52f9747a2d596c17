from reposcope.testing.conftest import (  # noqa: F401
    fixed_now,
    full_result_page,
    mock_backend,
    mock_cache,
    sample_repository,
    short_result_page,
)
