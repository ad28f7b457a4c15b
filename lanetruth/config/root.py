from .registry import Registry


# validation-related
CHECKS = Registry("checks", locations=["lanetruth.network.checks"])
VALIDATORS = Registry("validators", locations=["lanetruth.network.validation"])

# other registries
HOOKS = Registry("hooks", locations=["lanetruth.hooks", "lanetruth.utils.logging"])
