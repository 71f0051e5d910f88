"""
Unit tests for scale records and interval arithmetic.

Tests:
- Degree/interval conversion, rotation and flattening
- Scale invariants
- Name registry
- Scale records
"""

import pytest

from edo31.core.exceptions import ScaleInvariantError
from edo31.scales import (
    Alteration,
    NameRegistry,
    ScaleNamer,
    check_scale_invariants,
    degrees_from_intervals,
    flatten_degree,
    intervals_from_degrees,
    rotate,
)
from edo31.scales.intervals import ordinal, within_bounds


IONIAN_DEGREES = (0, 5, 10, 13, 18, 23, 28, 31)
IONIAN = (5, 5, 3, 5, 5, 5, 3)


class TestIntervals:
    """Test degree/interval arithmetic."""
    
    def test_intervals_from_degrees(self):
        """Test consecutive differences."""
        assert intervals_from_degrees(IONIAN_DEGREES) == IONIAN
    
    def test_degrees_from_intervals(self):
        """Test running sums."""
        assert degrees_from_intervals(IONIAN) == IONIAN_DEGREES
    
    def test_rotation(self):
        """Test that rotation 1 of Ionian is Dorian."""
        assert rotate(IONIAN, 1) == (5, 3, 5, 5, 5, 3, 5)
        assert rotate(IONIAN, 0) == IONIAN
    
    @pytest.mark.parametrize("a,b", [(1, 2), (3, 6), (5, 4), (6, 6)])
    def test_rotation_group_action(self, a, b):
        """Test that rotations compose and cycle with the scale size."""
        assert rotate(rotate(IONIAN, a), b) == rotate(IONIAN, (a + b) % 7)
        assert rotate(IONIAN, a + 7) == rotate(IONIAN, a)
    
    @pytest.mark.parametrize("k", range(7))
    def test_mode_round_trip(self, k):
        """Test that mode k rotated by 7 - k is its parent again."""
        parent = (6, 6, 2, 8, 5, 2, 2)
        mode = rotate(parent, k)
        
        assert sorted(mode) == sorted(parent)
        assert rotate(mode, 7 - k) == parent
        assert degrees_from_intervals(rotate(mode, 7 - k)) == (0, 6, 12, 14, 22, 27, 29, 31)
    
    def test_flatten_inner_degree(self):
        """Test that flattening moves one step between neighbours."""
        assert flatten_degree(IONIAN, 3) == (5, 5, 2, 6, 5, 5, 3)
    
    def test_flatten_tonic_wraps(self):
        """Test that flattening the tonic re-roots the scale."""
        flattened = flatten_degree(IONIAN, 0)
        
        assert flattened == (6, 5, 3, 5, 5, 5, 2)
        assert sum(flattened) == 31
    
    def test_within_bounds(self):
        """Test interval bound checking."""
        assert within_bounds(IONIAN, 3, 7)
        assert not within_bounds((2, 6, 5, 5, 5, 5, 3), 3, 7)
    
    def test_ordinals(self):
        """Test degree labels."""
        assert ordinal(0) == "1st"
        assert ordinal(3) == "4th"
        assert ordinal(10) == "11th"


class TestInvariants:
    """Test scale invariant checks."""
    
    def test_valid_scale(self):
        """Test that a diatonic scale passes."""
        check_scale_invariants(IONIAN_DEGREES, IONIAN)
    
    @pytest.mark.parametrize("degrees", [
        (1, 5, 10, 31),
        (0, 5, 10, 30),
        (0, 10, 5, 31),
        (0,),
    ])
    def test_bad_degrees(self, degrees):
        """Test that malformed degree lists raise."""
        with pytest.raises(ScaleInvariantError):
            check_scale_invariants(degrees, intervals_from_degrees(degrees))
    
    def test_mismatched_intervals(self):
        """Test that intervals must match degrees."""
        with pytest.raises(ScaleInvariantError) as exc_info:
            check_scale_invariants(IONIAN_DEGREES, (5, 5, 5, 3, 5, 5, 3))
        
        assert exc_info.value.code == "SCALE_INVARIANT_ERROR"


class TestNameRegistry:
    """Test run-scoped name uniqueness."""
    
    def test_suffixes(self):
        """Test that clashing names get numeric suffixes."""
        registry = NameRegistry()
        
        assert registry.claim("Dorian") == "Dorian"
        assert registry.claim("Dorian") == "Dorian 2"
        assert registry.claim("Dorian") == "Dorian 3"
        assert registry.claim("Lydian") == "Lydian"
        assert len(registry) == 4
        assert "Dorian 2" in registry
    
    def test_iteration_is_sorted(self):
        """Test iteration order."""
        registry = NameRegistry()
        for name in ("b", "a", "c"):
            registry.claim(name)
        
        assert list(registry) == ["a", "b", "c"]
    
    def test_registries_are_independent(self):
        """Test that separate registries do not share names."""
        first, second = NameRegistry(), NameRegistry()
        first.claim("Ionian")
        
        assert second.claim("Ionian") == "Ionian"


class TestScaleRecord:
    """Test scale assembly through the namer."""
    
    @pytest.fixture
    def namer(self):
        return ScaleNamer()
    
    def test_build_from_intervals(self, namer):
        """Test that degrees are derived and the family recorded."""
        scale = namer.build("Test", family="heptatonic", intervals=IONIAN)
        
        assert scale.degrees == IONIAN_DEGREES
        assert scale.note_count == 7
        assert scale.family == "heptatonic"
        assert set(scale.categories) == {"acoustic", "cultural", "perceptual", "mathematical", "genera"}
    
    def test_build_rejects_broken_scale(self, namer):
        """Test that an invalid record is never published."""
        with pytest.raises(ScaleInvariantError):
            namer.build("Broken", family="test", degrees=(0, 5, 30))
        
        assert "Broken" not in namer.registry
    
    def test_build_suffixes_duplicates(self, namer):
        """Test name suffixing through the namer."""
        first = namer.build("Same", family="test", intervals=IONIAN)
        second = namer.build("Same", family="test", intervals=IONIAN)
        
        assert (first.name, second.name) == ("Same", "Same 2")
    
    def test_records_are_frozen(self, namer):
        """Test immutability."""
        scale = namer.build("Frozen", family="test", intervals=IONIAN)
        
        with pytest.raises(Exception):
            scale.name = "Thawed"
    
    def test_to_dict(self, namer):
        """Test camelCase serialization without unset fields."""
        scale = namer.build(
            "Dict",
            family="test",
            intervals=IONIAN,
            alterations=(Alteration(degree=3, degree_name="4th", steps=1),),
        )
        data = scale.to_dict()
        
        assert data["degrees"] == list(IONIAN_DEGREES)
        assert data["properties"]["type"] == "test"
        assert data["alterations"] == [
            {"kind": "flatten", "degree": 3, "degreeName": "4th", "steps": 1}
        ]
