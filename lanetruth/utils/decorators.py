import functools


def apply_hooks(func):
    """A decorator to tell module to apply hooks

    Pre-hooks may rewrite the call arguments; post-hooks receive the result
    followed by the call arguments and return the (possibly new) result.

    Use it on instance methods as:

    class TestClass:
        @apply_hooks
        def func1(...):
        ...
    """

    @functools.wraps(func)
    def _apply_hooks(self, *args, **kwargs):
        args, kwargs = self._apply_pre_hooks(*args, **kwargs)
        return self._apply_post_hooks(func(self, *args, **kwargs), *args)

    return _apply_hooks
