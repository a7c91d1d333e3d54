"""Handler factories shared by the tests."""


def bump(key):
    """Handler that increments state[key], starting from 1."""
    def handler(state, payload, meta):
        return {key: state.get(key, 0) + 1}
    handler.__name__ = f"bump_{key}"
    return handler


def noop(state, payload, meta):
    return None


def returning(partial):
    """Handler that always returns the same partial update."""
    def handler(state, payload, meta):
        return partial
    return handler
