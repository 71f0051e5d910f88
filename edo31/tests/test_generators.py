"""
Unit tests for the scale generators.

Tests:
- Heptatonic flattening and modes
- MOS and well-formed stacking
- Hybrid, xenharmonic, historical and transformed families
- Cultural approximations
- Recursive explorers and their limits
"""

import pytest

from edo31.core.config import settings
from edo31.core.exceptions import ValidationError
from edo31.scales import ScaleNamer, rotate
from edo31.scales.intervals import ordinal, within_bounds
from edo31.scales.generators import (
    explore_flattenings,
    flatten_heptatonic,
    generate_cultural_scales,
    generate_heptatonic_scales,
    generate_historical_temperaments,
    generate_hybrid_scales,
    generate_mos_scales,
    generate_transformed_scales,
    generate_variable_cardinality_scales,
    generate_well_formed_scales,
    generate_xenharmonic_scales,
)
from edo31.scales.generators.cultural import apply_edits, avaroha, is_valid_variant
from edo31.scales.generators.exploration import equally_spaced
from edo31.scales.generators.heptatonic import hyperlydian
from edo31.scales.generators.hybrid import alternating_splice, tetrachord_splice
from edo31.scales.generators.mos import stack_generator
from edo31.scales.generators.transformed import close_octave, invert
from edo31.scales.generators.xenharmonic import tile_pattern


IONIAN = (5, 5, 3, 5, 5, 5, 3)


@pytest.fixture
def namer():
    return ScaleNamer()


def assert_valid(scale):
    assert scale.degrees[0] == 0
    assert scale.degrees[-1] == 31
    assert all(b > a for a, b in zip(scale.degrees, scale.degrees[1:]))
    assert sum(scale.intervals) == 31


class TestHeptatonic:
    """Test the circle-of-fourths flattening generator."""
    
    def test_base_patterns(self):
        """Test the Hyperlydian bases."""
        assert hyperlydian(2) == (6, 6, 5, 5, 5, 2, 2)
        assert hyperlydian(3) == IONIAN
    
    def test_unknown_min_step(self):
        """Test that a base without a Hyperlydian is rejected."""
        with pytest.raises(ValidationError):
            hyperlydian(4)
    
    def test_first_flattening_is_fourth_degree(self):
        """Test the first candidate flattens degree 3 by one step."""
        found = flatten_heptatonic(2)
        intervals, log = found[1]
        
        assert found[0] == ((6, 6, 5, 5, 5, 2, 2), ())
        assert intervals == (6, 6, 4, 6, 5, 2, 2)
        assert [(alt.degree, alt.steps) for alt in log] == [(3, 1)]
    
    def test_patterns_are_unique(self):
        """Test deduplication on interval tuples."""
        patterns = [intervals for intervals, _ in flatten_heptatonic(2)]
        
        assert len(patterns) == len(set(patterns))
        assert all(min(p) >= 2 for p in patterns)
    
    @pytest.mark.parametrize("stop_on_duplicate", [True, False])
    def test_parent_sequence(self, stop_on_duplicate):
        """Test the exact parents of the default two-step search."""
        patterns = [p for p, _ in flatten_heptatonic(2, 5, stop_on_duplicate)]
        
        assert patterns == [
            (6, 6, 5, 5, 5, 2, 2),
            (6, 6, 4, 6, 5, 2, 2),
            (6, 6, 3, 7, 5, 2, 2),
            (6, 6, 2, 8, 5, 2, 2),
            (5, 7, 2, 8, 5, 2, 2),
            (4, 8, 2, 8, 5, 2, 2),
            (3, 9, 2, 8, 5, 2, 2),
            (2, 10, 2, 8, 5, 2, 2),
            (2, 10, 2, 7, 6, 2, 2),
            (2, 10, 2, 6, 7, 2, 2),
            (2, 10, 2, 5, 8, 2, 2),
            (2, 10, 2, 4, 9, 2, 2),
            (2, 10, 2, 3, 10, 2, 2),
        ]
    
    @pytest.mark.parametrize("stop_on_duplicate", [True, False])
    def test_parent_sequence_three_step(self, stop_on_duplicate):
        """Test the exact parents of the three-step search."""
        found = flatten_heptatonic(3, 5, stop_on_duplicate)
        
        assert [p for p, _ in found] == [
            (5, 5, 3, 5, 5, 5, 3),
            (5, 5, 3, 5, 4, 6, 3),
            (5, 5, 3, 5, 3, 7, 3),
            (4, 6, 3, 5, 3, 7, 3),
            (3, 7, 3, 5, 3, 7, 3),
        ]
        assert [(alt.degree, alt.steps) for alt in found[-1][1]] == [(5, 1), (5, 2), (1, 1), (1, 2)]
    
    def test_default_parent_count(self, namer):
        """Test thirteen parents with six modes each under default settings."""
        scales = generate_heptatonic_scales(namer)
        parents = [s for s in scales if s.properties["type"] == "heptatonic"]
        
        assert len(parents) == 13
        assert len(scales) == 91
    
    def test_continue_past_duplicates(self):
        """Test that stepping past duplicates still yields unique patterns."""
        patterns = [p for p, _ in flatten_heptatonic(2, stop_on_duplicate=False)]
        
        assert patterns[0] == hyperlydian(2)
        assert len(patterns) == len(set(patterns))
    
    def test_modes(self, namer):
        """Test that every parent is followed by its six rotations."""
        scales = generate_heptatonic_scales(namer, min_step=2)
        
        assert len(scales) % 7 == 0
        assert scales[0].name == "Hyperlydian"
        for i in range(0, len(scales), 7):
            parent = scales[i]
            for rotation in range(1, 7):
                mode = scales[i + rotation]
                assert mode.intervals == rotate(parent.intervals, rotation)
                assert mode.properties["parent"] == parent.name
                assert mode.properties["rotation"] == rotation
                assert rotate(mode.intervals, 7 - rotation) == parent.intervals
    
    def test_western_lineage(self, namer):
        """Test that flattened scales are tagged as Western classical."""
        scales = generate_heptatonic_scales(namer, min_step=3)
        
        assert all("Western Classical" in s.categories["cultural"] for s in scales)


class TestMos:
    """Test moment-of-symmetry and well-formed scales."""
    
    def test_stack_generator(self):
        """Test stacking fifths."""
        assert stack_generator(18, 7) == (0, 5, 10, 15, 18, 23, 28, 31)
    
    def test_two_step_sizes(self, namer):
        """Test that every MOS has exactly two step sizes."""
        scales = generate_mos_scales(namer)
        
        assert scales
        for scale in scales:
            assert len(set(scale.intervals)) == 2
            assert scale.note_count == scale.properties["noteCount"]
            assert within_bounds(scale.intervals, 3, 7)
    
    def test_diatonic_mos(self, namer):
        """Test the fifth-generated heptatonic MOS."""
        scales = {s.name: s for s in generate_mos_scales(namer)}
        diatonic = scales["Diatonic MOS (5L2s)"]
        
        assert diatonic.properties["largeStep"] == 5
        assert diatonic.properties["smallStep"] == 3
    
    def test_well_formed_fifths_give_diatonic(self, namer):
        """Test that seven stacked fifths are a rotation of Ionian."""
        scales = generate_well_formed_scales(namer)
        match = [
            s for s in scales
            if s.properties["generator"] == 18 and s.properties["noteCount"] == 7
        ]
        
        assert len(match) == 1
        assert match[0].intervals in {rotate(IONIAN, k) for k in range(7)}
        assert match[0].name == "BiWF-perfectfifth-7"


class TestOtherFamilies:
    """Test hybrid, xenharmonic, historical and transformed scales."""
    
    def test_tetrachord_splice(self):
        """Test joining a major lower tetrachord to a Hijaz upper part."""
        degrees = tetrachord_splice((0, 5, 10, 13, 18, 23, 28, 31), (0, 3, 9, 13, 18, 21, 27, 31))
        
        assert degrees == (0, 5, 10, 13, 18, 21, 27, 31)
    
    def test_alternating_splice(self):
        """Test that alternation keeps sorted unique degrees."""
        degrees = alternating_splice((0, 5, 10, 13, 18, 23, 28, 31), (0, 3, 9, 13, 18, 21, 27, 31))
        
        assert degrees == (0, 5, 9, 13, 18, 23, 27, 31)
    
    def test_hybrids_in_bounds(self, namer):
        """Test that every hybrid is within the step bounds."""
        scales = generate_hybrid_scales(namer)
        
        assert scales
        assert all(within_bounds(s.intervals, 3, 7) for s in scales)
    
    def test_tile_pattern(self):
        """Test pattern tiling closes at the octave."""
        assert tile_pattern((3, 4), 7) == (0, 3, 7, 10, 14, 17, 21, 24, 28, 31)
    
    def test_xenharmonic(self, namer):
        """Test patterned scales are bound-checked and names unique."""
        scales = generate_xenharmonic_scales(namer)
        patterned = [s for s in scales if s.family == "xenharmonic-patterned"]
        
        assert patterned
        assert all(within_bounds(s.intervals, 3, 7) for s in patterned)
        assert "Ultrachromatic Xenotonic" in {s.name for s in scales}
    
    def test_historical_modes(self, namer):
        """Test that each temperament gets seven positional modes."""
        scales = generate_historical_temperaments(namer)
        names = {s.name for s in scales}
        
        assert len(scales) == 42
        assert "Werckmeister III" in names
        assert "Werckmeister III Dorian" in names
        assert "Pythagorean Locrian" in names
    
    def test_historical_rotation_round_trip(self, namer):
        """Test that rotating mode k by 7 - k restores its temperament."""
        scales = generate_historical_temperaments(namer)
        
        for i in range(0, len(scales), 7):
            base = scales[i]
            for rotation in range(1, 7):
                mode = scales[i + rotation]
                assert mode.alterations[0].rotation == rotation
                assert rotate(mode.intervals, 7 - rotation) == base.intervals
    
    def test_inversion(self):
        """Test mirroring the major scale gives Phrygian."""
        assert invert((0, 5, 10, 13, 18, 23, 28, 31)) == (0, 3, 8, 13, 18, 21, 26, 31)
    
    def test_close_octave(self):
        """Test that overshooting intervals are dropped."""
        assert close_octave((6, 6, 4, 6, 6, 6, 4)) == (0, 6, 12, 16, 22, 28, 31)
    
    def test_transformed(self, namer):
        """Test transformed scales stay in bounds."""
        scales = {s.name: s for s in generate_transformed_scales(namer)}
        
        assert scales["Inverted Major"].intervals == (3, 5, 5, 5, 3, 5, 5)
        assert scales["Diminished Major"].intervals == (4, 4, 3, 4, 4, 4, 3, 5)
        assert all(within_bounds(s.intervals, 3, 7) for s in scales.values())
        for scale in scales.values():
            (alteration,) = scale.alterations
            assert alteration.kind == "transform"
            assert alteration.source == scale.properties["baseName"]


class TestCultural:
    """Test cultural approximations."""
    
    @pytest.fixture
    def names(self, namer):
        return {s.name for s in generate_cultural_scales(namer)}
    
    def test_apply_edits(self):
        """Test degree edits."""
        assert apply_edits((0, 5, 9, 13, 18, 23, 27, 31), [(6, -1)]) == (0, 5, 9, 13, 18, 23, 26, 31)
    
    def test_variant_must_differ(self):
        """Test that an unchanged variant is rejected."""
        degrees = (0, 4, 8, 13, 18, 22, 31)
        
        assert not is_valid_variant(degrees, degrees, (2, 9))
    
    def test_avaroha_passing_tone(self):
        """Test the passing tone between the 4th and 5th."""
        assert avaroha((0, 5, 10, 15, 18, 23, 28, 31), True) == (0, 5, 10, 15, 16, 18, 23, 28, 31)
    
    def test_maqam_variants(self, names):
        """Test accepted and rejected maqam variants."""
        assert "Maqam Rast" in names
        assert "Maqam Rast Suznak" in names
        assert "Maqam Saba Zamzam" in names
        # A 2-step interval is outside the maqam bounds
        assert "Maqam Hijaz Kar" not in names
        assert "Maqam Nahawand Kurd" not in names
    
    def test_raga_forms(self, names):
        """Test aroha and avaroha forms."""
        assert "Raga Kalyan Aroha" in names
        assert "Raga Kalyan Avaroha" in names
        assert "Raga Bilawal Aroha" in names
        assert "Raga Bilawal Avaroha" not in names
    
    def test_blue_notes(self, names):
        """Test blue-note variants."""
        assert "Blue Seventh Traditional Blues" in names
        assert "Blue Fifth Traditional Blues" in names
        # Microtonal blues already has a blue third
        assert "Blue Third Microtonal Blues" not in names
    
    def test_gamelan(self, names):
        """Test fixed gamelan tables."""
        assert {"Pelog", "Slendro", "Sundanese Pelog"} <= names


class TestExploration:
    """Test the recursive explorers."""
    
    def test_depth_limit(self, namer):
        """Test that no path exceeds the depth limit."""
        scales = explore_flattenings(namer, max_depth=2, max_scales=1000)
        
        assert scales[0].name == "Hyperlydian"
        for scale in scales[1:]:
            assert len(scale.properties["mutationPath"].split("-")) <= 2
            assert within_bounds(scale.intervals, 3, 7)
    
    def test_breadth_limit(self, namer):
        """Test the cap on emitted scales."""
        scales = explore_flattenings(namer, max_depth=12, max_scales=25)
        
        assert len(scales) == 25
        assert len({s.intervals for s in scales}) == 25
    
    def test_default_limits(self, namer):
        """Test the non-sequential explorer at the configured limits."""
        scales = explore_flattenings(namer)
        patterns = [s.intervals for s in scales]
        
        assert 1 < len(scales) <= settings.exploration_max_scales
        assert len(patterns) == len(set(patterns))
        for scale in scales:
            assert_valid(scale)
            assert within_bounds(scale.intervals, settings.min_step, settings.max_step)
        for scale in scales[1:]:
            path = scale.properties["mutationPath"].split("-")
            assert len(path) <= settings.exploration_max_depth
    
    def test_cardinality_default_limits(self, namer):
        """Test the cardinality explorer at the configured limits."""
        scales = generate_variable_cardinality_scales(namer)
        
        assert len({(s.note_count, s.intervals) for s in scales}) == len(scales)
        for scale in scales:
            assert_valid(scale)
            assert within_bounds(scale.intervals, settings.min_step, settings.max_step)
            assert len(scale.alterations) <= settings.cardinality_max_depth
    
    def test_cardinality_names_carry_alterations(self, namer):
        """Test that flattened names differ without registry suffixes."""
        scales = [s for s in generate_variable_cardinality_scales(namer) if s.alterations]
        
        assert scales
        for scale in scales:
            assert scale.name.endswith(")")
            for degree in {alt.degree for alt in scale.alterations}:
                assert f"{ordinal(degree)}↓" in scale.name
    
    def test_equally_spaced(self):
        """Test evenly spread bases."""
        assert equally_spaced(5, 3, 7) == (6, 6, 6, 7, 6)
        assert equally_spaced(6, 3, 7) == (5, 5, 5, 5, 6, 5)
        assert equally_spaced(8, 3, 7) == (4, 4, 4, 4, 4, 4, 4, 3)
        assert equally_spaced(9, 3, 7) == (3, 4, 3, 4, 3, 4, 3, 4, 3)
    
    def test_variable_cardinality(self, namer):
        """Test bases and single flattenings for each cardinality."""
        scales = generate_variable_cardinality_scales(namer, max_depth=1)
        
        assert scales[0].name == "Isopentatonic"
        assert {s.note_count for s in scales} == {5, 6, 8, 9}
        for scale in scales:
            assert len(scale.alterations) <= 1
            assert within_bounds(scale.intervals, 3, 7)
            assert all(alt.degree != 0 for alt in scale.alterations)


class TestRecordInvariants:
    """Test that every generator publishes valid records."""
    
    @pytest.mark.parametrize("generator", [
        generate_cultural_scales,
        generate_historical_temperaments,
        generate_hybrid_scales,
        generate_mos_scales,
        generate_transformed_scales,
        generate_well_formed_scales,
        generate_xenharmonic_scales,
    ])
    def test_records_are_valid(self, namer, generator):
        """Test degree/interval invariants on every record."""
        for scale in generator(namer):
            assert_valid(scale)
