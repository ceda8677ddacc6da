"""Pytest configuration and fixtures."""

import pytest

from tsutsumi import FormData, MultipartFile


@pytest.fixture
def boundary():
    """Fixed boundary so expected bodies can be written out literally."""
    return "--dio-boundary-0000000001"


@pytest.fixture
def form(boundary):
    """Empty form using the fixed boundary."""
    return FormData(boundary=boundary)


@pytest.fixture
def async_source():
    """Factory for async-only file sources that record how they were consumed."""

    def make(chunks, length=None, fail_after=None, filename="data.bin", content_type=None):
        state = {"started": False, "closed": False, "yielded": 0}

        async def gen():
            state["started"] = True
            try:
                for i, chunk in enumerate(chunks):
                    if fail_after is not None and i == fail_after:
                        raise OSError("disk went away")
                    state["yielded"] += 1
                    yield chunk
            finally:
                state["closed"] = True

        if length is None:
            length = sum(len(c) for c in chunks)
        source = MultipartFile(gen(), length, filename=filename, content_type=content_type)
        return source, state

    return make
