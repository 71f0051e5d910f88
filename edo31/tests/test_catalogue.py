"""
Tests for catalogue runs, serialization and queries.

Tests:
- Name uniqueness and registry isolation across runs
- Determinism
- JSON document shape
- Filtering and sorting
- Settings
"""

import json

import pytest

from edo31.catalogue import Catalogue, CatalogueRun, CatalogueWriter, family_metadata, filter_scales
from edo31.catalogue.writer import format_family_name
from edo31.core.config import Settings
from edo31.core.exceptions import CatalogueError, GenerationError, ValidationError
from edo31.scales import ScaleNamer


@pytest.fixture
def small_settings():
    """Settings with tight exploration limits to keep runs fast."""
    return Settings(
        exploration_max_depth=4,
        exploration_max_scales=120,
        cardinality_max_depth=3,
    )


@pytest.fixture
def catalogue(small_settings):
    return CatalogueRun(small_settings).run()


class TestCatalogueRun:
    """Test a full generation run."""
    
    def test_all_families_present(self, catalogue):
        """Test that every family is generated in order."""
        assert list(catalogue.families) == [
            "modes",
            "nonSequentialHeptatonic",
            "variableCardinality",
            "cultural",
            "mos",
            "wellFormed",
            "hybrid",
            "xenharmonic",
            "historical",
            "transformed",
        ]
        assert all(catalogue.families.values())
    
    def test_names_unique_across_families(self, catalogue):
        """Test global name uniqueness within a run."""
        names = [scale.name for scale in catalogue.all_scales()]
        
        assert len(names) == len(set(names))
    
    def test_modes_claim_names_first(self, catalogue):
        """Test that the mode family wins the unsuffixed Hyperlydian."""
        assert catalogue.modes[0].name == "Hyperlydian"
        assert catalogue.families["nonSequentialHeptatonic"][0].name == "Hyperlydian 2"
    
    def test_exploration_limit_respected(self, catalogue):
        """Test the injected breadth cap."""
        assert len(catalogue.families["nonSequentialHeptatonic"]) <= 120
    
    def test_registry_isolated_between_runs(self, small_settings):
        """Test that a second run starts with a fresh registry."""
        first = CatalogueRun(small_settings).run()
        second = CatalogueRun(small_settings).run()
        
        assert second.modes[0].name == "Hyperlydian"
        assert [s.to_dict() for s in first.all_scales()] == [s.to_dict() for s in second.all_scales()]
    
    def test_unknown_family(self, small_settings):
        """Test that an unknown family key raises."""
        with pytest.raises(GenerationError) as exc_info:
            CatalogueRun(small_settings).generate_family("dodecaphonic")
        
        assert exc_info.value.code == "GENERATION_ERROR"


class TestCatalogueWriter:
    """Test JSON serialization."""
    
    def test_documents(self, catalogue, tmp_path):
        """Test the shape of every written document."""
        written = CatalogueWriter(output_dir=tmp_path, write_chords=False).write(catalogue)
        
        assert [p.name for p in written] == [
            "modes.json",
            "cultural_etc.json",
            "extra_scales.json",
            "scale-families-metadata.json",
        ]
        
        modes = json.loads((tmp_path / "modes.json").read_text(encoding="utf-8"))
        assert isinstance(modes, list)
        assert modes[0]["name"] == "Hyperlydian"
        assert set(modes[0]) >= {"name", "degrees", "intervals", "categories", "properties", "description"}
        
        cultural = json.loads((tmp_path / "cultural_etc.json").read_text(encoding="utf-8"))
        assert set(cultural) == {"nonSequentialHeptatonic", "variableCardinality", "cultural"}
        
        extra = json.loads((tmp_path / "extra_scales.json").read_text(encoding="utf-8"))
        assert set(extra) == {"mos", "wellFormed", "hybrid", "xenharmonic", "historical", "transformed"}
    
    def test_metadata(self, catalogue):
        """Test family metadata names and counts."""
        metadata = family_metadata(catalogue)
        
        assert metadata["wellFormed"] == {
            "name": "Well Formed",
            "count": len(catalogue.families["wellFormed"]),
        }
        assert format_family_name("nonSequentialHeptatonic") == "Non Sequential Heptatonic"
    
    def test_chords_document(self, tmp_path):
        """Test optional chord output."""
        namer = ScaleNamer()
        scale = namer.build("Major", family="test", degrees=(0, 5, 10, 13, 18, 23, 28, 31))
        catalogue = Catalogue(families={"modes": [scale]})
        
        CatalogueWriter(output_dir=tmp_path, write_chords=True).write(catalogue)
        chords = json.loads((tmp_path / "chords.json").read_text(encoding="utf-8"))
        
        assert set(chords) == {"Major"}
        assert chords["Major"]["traditional"]["triads"][0]["type"] == "major"
    
    def test_unwritable_directory(self, tmp_path):
        """Test that I/O failures surface as catalogue errors."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        
        with pytest.raises(CatalogueError):
            CatalogueWriter(output_dir=blocker).write(Catalogue())


class TestQuery:
    """Test scale filtering and sorting."""
    
    @pytest.fixture
    def scales(self):
        namer = ScaleNamer()
        return [
            namer.build("Alpha", family="test", degrees=(0, 5, 10, 13, 18, 23, 28, 31)),
            namer.build("Beta", family="test", degrees=(0, 6, 12, 18, 25, 31)),
            namer.build("Gamma", family="test", degrees=(0, 3, 8, 13, 18, 21, 26, 31)),
        ]
    
    def test_note_count(self, scales):
        """Test filtering by size."""
        assert [s.name for s in filter_scales(scales, note_count=5)] == ["Beta"]
    
    def test_search(self, scales):
        """Test search over names and intervals."""
        assert [s.name for s in filter_scales(scales, search="ALPH")] == ["Alpha"]
        assert [s.name for s in filter_scales(scales, search="6-6-6")] == ["Beta"]
    
    def test_category(self, scales):
        """Test filtering by a category tag."""
        assert [s.name for s in filter_scales(scales, category="Diatonic")] == ["Alpha", "Gamma"]
        assert len(filter_scales(scales, category="genera")) == 3
    
    def test_sorting(self, scales):
        """Test sort keys and direction."""
        assert [s.name for s in filter_scales(scales, sort_by="noteCount")][0] == "Beta"
        assert [s.name for s in filter_scales(scales, sort_by="brightness")] == ["Gamma", "Beta", "Alpha"]
        assert [s.name for s in filter_scales(scales, descending=True)] == ["Gamma", "Beta", "Alpha"]
    
    def test_bad_sort_key(self, scales):
        """Test that unknown sort keys are rejected."""
        with pytest.raises(ValidationError):
            filter_scales(scales, sort_by="colour")


class TestSettings:
    """Test configuration loading."""
    
    def test_defaults(self):
        """Test default generation parameters."""
        s = Settings()
        
        assert (s.min_step, s.max_step, s.heptatonic_min_step) == (3, 7, 2)
        assert s.flatten_passes == 5
        assert s.stop_on_duplicate is True
    
    def test_fields(self):
        """Test that every setting is one the engine reads."""
        assert set(Settings.model_fields) == {
            "output_dir",
            "write_chords",
            "heptatonic_min_step",
            "min_step",
            "max_step",
            "flatten_passes",
            "stop_on_duplicate",
            "exploration_max_depth",
            "exploration_max_scales",
            "cardinality_max_depth",
            "log_level",
            "log_format",
        }
    
    def test_environment_override(self, monkeypatch):
        """Test EDO31_ prefixed environment variables."""
        monkeypatch.setenv("EDO31_EXPLORATION_MAX_DEPTH", "3")
        monkeypatch.setenv("EDO31_LOG_FORMAT", "json")
        s = Settings()
        
        assert s.exploration_max_depth == 3
        assert s.log_format == "json"
