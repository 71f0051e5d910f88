"""
Run-scoped registry of scale names.
"""

from typing import Dict, Iterator, Set


class NameRegistry:
    """
    Hands out names that are unique within one generation run.
    
    A clashing name gets a numeric suffix (" 2", " 3", ...) until it is
    free. Create one registry per run.
    """
    
    def __init__(self):
        self._names: Set[str] = set()
        self._next_suffix: Dict[str, int] = {}
    
    def claim(self, name: str) -> str:
        """
        Register a name, suffixing it if already taken.
        
        Args:
            name: Desired name
            
        Returns:
            The name actually registered
        """
        unique = name
        suffix = self._next_suffix.get(name, 2)
        while unique in self._names:
            unique = f"{name} {suffix}"
            suffix += 1
        if unique != name:
            self._next_suffix[name] = suffix
        self._names.add(unique)
        return unique
    
    def __contains__(self, name: str) -> bool:
        return name in self._names
    
    def __len__(self) -> int:
        return len(self._names)
    
    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))
