from lanetruth.network.base import BaseModule
from lanetruth.utils import decorators


def test_apply_hooks():
    class TestClass(BaseModule):
        def __init__(self):
            super().__init__()
            self.a = 0

        @decorators.apply_hooks
        def __call__(self, increment):
            self.a += increment
            return self.a

    def pre_hook(increment, *args, **kwargs):
        increment += 10
        return args, {**kwargs, "increment": increment}

    def post_hook(a, *args):
        return a + 100

    atest = TestClass()
    atest.register_pre_hook(pre_hook)
    atest.register_post_hook(post_hook)

    assert atest.a == 0
    a_out = atest(increment=1)
    assert atest.a == 11
    assert a_out == 111


def test_post_hook_sees_call_args():
    seen = []

    class TestClass(BaseModule):
        @decorators.apply_hooks
        def __call__(self, graph):
            return [graph]

    def post_hook(result, graph):
        seen.append(graph)
        return result

    atest = TestClass(post_hooks=[])
    atest.register_post_hook(post_hook)
    assert atest("graph") == ["graph"]
    assert seen == ["graph"]
