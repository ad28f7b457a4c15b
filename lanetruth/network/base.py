from typing import List

from lanetruth.config import HOOKS, ConfigDict


class BaseModule:
    def __init__(
        self, pre_hooks: List[ConfigDict] = (), post_hooks: List[ConfigDict] = ()
    ) -> None:
        self.pre_hooks = [HOOKS.build(hook) for hook in pre_hooks]
        self.post_hooks = [HOOKS.build(hook) for hook in post_hooks]

    def _apply_pre_hooks(self, *args, **kwargs):
        for hook in self.pre_hooks:
            args, kwargs = hook(*args, **kwargs)
        return args, kwargs

    def _apply_post_hooks(self, result, *args):
        for hook in self.post_hooks:
            result = hook(result, *args)
        return result

    def register_pre_hook(self, hook):
        self.pre_hooks.append(hook)

    def register_post_hook(self, hook):
        self.post_hooks.append(hook)
