import pytest


@pytest.fixture
def agenerator():
    """Helper to create async generators."""

    def _agenerator(items):
        async def gen():
            for item in items:
                yield item

        return gen()

    return _agenerator


@pytest.fixture
def alist():
    """Helper to consume async generators."""

    async def _alist(async_gen):
        items = []
        async for item in async_gen:
            items.append(item)
        return items

    return _alist
