"""
CafeOps package

State engine of a café floor: orders, tables, kitchen tickets, menu,
recipes and inventory kept consistent while several stations mutate them.
The domain objects, the store/reducer and orchestration core, and the seed
data live in distinct subpackages.
"""

__all__ = ["core", "domain", "data"]
