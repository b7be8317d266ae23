"""Tests for sample indexing, options and batch conversion."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from exs_builder import EXSBuilder
from exsconvert.analysis.program_type import ProgramClassifier
from exsconvert.converters.batch import convert_directory, convert_file, find_exs_files
from exsconvert.converters.options import ConvertOptions
from exsconvert.converters.samples import SampleIndex, upper_extension, walk_files
from exsconvert.formats.xpm.reader import XPMReader
from exsconvert.models.program import ProgramType
from exsconvert.utils.validation import (
    ConversionError,
    EXSFormatError,
    SampleNotFoundError,
    ValidationError,
)


class TestSampleIndex:
    """Test cases for the sample index."""

    def test_indexes_recursively(self, samples_dir):
        """Test that files in sub-folders are indexed by name."""
        index = SampleIndex.build(samples_dir)

        assert len(index) == 7
        assert index["kick.wav"] == samples_dir / "Drums" / "kick.wav"
        assert "piano_high.wav" in index

    def test_first_duplicate_wins(self, tmp_path):
        """Test that the first file found in sorted order is kept."""
        (tmp_path / "A").mkdir()
        (tmp_path / "B").mkdir()
        (tmp_path / "A" / "kick.wav").write_bytes(b"A")
        (tmp_path / "B" / "kick.wav").write_bytes(b"B")

        assert SampleIndex.build(tmp_path)["kick.wav"] == tmp_path / "A" / "kick.wav"

    def test_sub_folder_visited_in_name_order(self, tmp_path):
        """Test that a sub-folder sorting before a file is searched first."""
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "x.wav").write_bytes(b"nested")
        (tmp_path / "x.wav").write_bytes(b"top")
        (tmp_path / "z").mkdir()
        (tmp_path / "z" / "y.wav").write_bytes(b"late")
        (tmp_path / "y.wav").write_bytes(b"early")
        index = SampleIndex.build(tmp_path)

        assert index["x.wav"] == tmp_path / "a" / "x.wav"
        assert index["y.wav"] == tmp_path / "y.wav"

    def test_walk_files_order(self, tmp_path):
        """Test depth-first traversal in name order."""
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "c.wav").write_bytes(b"")
        (tmp_path / "a.wav").write_bytes(b"")
        (tmp_path / "d.wav").write_bytes(b"")

        assert [p.relative_to(tmp_path).as_posix() for p in walk_files(tmp_path)] == ["a.wav", "b/c.wav", "d.wav"]

    def test_missing_root(self, tmp_path):
        """Test that a missing samples folder is an error."""
        with pytest.raises(FileNotFoundError):
            SampleIndex.build(tmp_path / "missing")

    def test_copy_sample(self, samples_dir, tmp_path):
        """Test copying with an upper-cased extension."""
        dest = tmp_path / "out"
        dest.mkdir()
        name, file_name = SampleIndex.build(samples_dir).copy_sample("snare.wav", dest)

        assert (name, file_name) == ("snare", "snare.WAV")
        assert (dest / "snare.WAV").read_bytes() == b"RIFFsnare"

    def test_copy_unknown_sample(self, samples_dir, tmp_path):
        """Test that unknown names raise SampleNotFoundError."""
        with pytest.raises(SampleNotFoundError, match="no sample found for clap.wav"):
            SampleIndex.build(samples_dir).copy_sample("clap.wav", tmp_path)

    def test_upper_extension(self):
        """Test extension upper-casing."""
        assert upper_extension("Kick 01.wav") == "Kick 01.WAV"
        assert upper_extension("loop.aif") == "loop.AIF"
        assert upper_extension("noext") == "noext"


class TestOptions:
    """Test cases for conversion options."""

    def test_defaults(self, tmp_path):
        """Test default option values."""
        options = ConvertOptions.create(tmp_path, tmp_path / "out")

        assert options.layers_per_instrument == 4
        assert options.skip_errors is True
        assert options.program_type is None
        assert options.samples_root == tmp_path

    @pytest.mark.parametrize(
        "value,expected",
        [("drum", ProgramType.DRUM), ("Keygroup", ProgramType.KEYGROUP), ("", None), ("auto", None)],
    )
    def test_program_type_parsing(self, tmp_path, value, expected):
        """Test program type names."""
        assert ConvertOptions.create(tmp_path, tmp_path, program_type=value).program_type == expected

    def test_invalid_program_type(self, tmp_path):
        """Test that unknown program types are rejected."""
        with pytest.raises(ValidationError, match="Invalid program type"):
            ConvertOptions.create(tmp_path, tmp_path, program_type="sampler")

    def test_invalid_layers(self, tmp_path):
        """Test that zero layers per instrument is rejected."""
        with pytest.raises(ValidationError):
            ConvertOptions.create(tmp_path, tmp_path, layers_per_instrument=0)

    def test_samples_root(self, tmp_path):
        """Test the sample search folder for files and explicit paths."""
        exs = tmp_path / "Kit.exs"
        exs.write_bytes(b"")

        assert ConvertOptions.create(exs, tmp_path).samples_root == tmp_path
        assert ConvertOptions.create(exs, tmp_path, samples_path=tmp_path / "S").samples_root == tmp_path / "S"


class TestFindFiles:
    """Test cases for instrument discovery."""

    def test_recursive(self, instrument_dir):
        """Test that .exs files are found in sub-folders."""
        files = find_exs_files(instrument_dir)

        assert [f.name for f in files] == ["Kit.exs", "Piano.exs"]

    def test_upper_case_suffix(self, tmp_path):
        """Test that .EXS files are found and other files ignored."""
        (tmp_path / "A.EXS").write_bytes(b"")
        (tmp_path / "notes.txt").write_bytes(b"")

        assert [f.name for f in find_exs_files(tmp_path)] == ["A.EXS"]

    def test_missing_path(self, tmp_path):
        """Test that a missing search path is an error."""
        with pytest.raises(FileNotFoundError):
            find_exs_files(tmp_path / "missing")


class TestConvertDirectory:
    """Test cases for batch conversion."""

    def test_converts_all(self, instrument_dir, samples_dir, tmp_path):
        """Test the full pipeline over a folder."""
        output = tmp_path / "Programs"
        options = ConvertOptions.create(instrument_dir, output, samples_path=samples_dir)
        batch = convert_directory(options)

        assert len(batch) == 2
        assert len(batch.converted) == 2
        kit, piano = batch.results
        assert kit.program_type == ProgramType.DRUM
        assert piano.program_type == ProgramType.KEYGROUP
        assert piano.xpm_path == output / "Piano" / "Piano.xpm"
        assert (output / "Kit" / "kick.WAV").exists()
        assert (output / "Piano" / "piano_high.WAV").exists()
        assert XPMReader.read(kit.xpm_path).is_drum
        assert (kit.instruments, kit.layers) == (4, 4)
        assert (piano.instruments, piano.layers) == (2, 3)

    def test_forced_program_type(self, instrument_dir, samples_dir, tmp_path):
        """Test that an explicit program type overrides detection."""
        options = ConvertOptions.create(
            instrument_dir, tmp_path / "out", program_type="keygroup", samples_path=samples_dir
        )
        batch = convert_directory(options)

        assert [r.program_type for r in batch.results] == [ProgramType.KEYGROUP, ProgramType.KEYGROUP]

    def test_custom_classifier(self, instrument_dir, samples_dir, tmp_path):
        """Test that the classifier is pluggable."""

        class AlwaysDrum(ProgramClassifier):
            def classify(self, instrument):
                return ProgramType.DRUM

        options = ConvertOptions.create(instrument_dir, tmp_path / "out", samples_path=samples_dir)
        batch = convert_directory(options, classifier=AlwaysDrum())

        assert all(r.program_type == ProgramType.DRUM for r in batch.results)

    def test_no_files(self, tmp_path):
        """Test that an empty folder is a conversion error."""
        with pytest.raises(ConversionError, match="no exs files found"):
            convert_directory(ConvertOptions.create(tmp_path, tmp_path / "out"))

    def test_progress_callback(self, instrument_dir, samples_dir, tmp_path):
        """Test that the callback sees every file in order."""
        seen = []
        options = ConvertOptions.create(instrument_dir, tmp_path / "out", samples_path=samples_dir)
        convert_directory(options, progress=seen.append)

        assert [p.name for p in seen] == ["Kit.exs", "Piano.exs"]


class TestErrorPolicy:
    """Test cases for skip and rollback behaviour."""

    @pytest.fixture
    def broken_dir(self, instrument_dir):
        (instrument_dir / "Broken.exs").write_bytes(b"not an exs file at all, just text" * 4)
        return instrument_dir

    def test_skip_errors_continues(self, broken_dir, samples_dir, tmp_path):
        """Test that failing files are skipped and reported."""
        options = ConvertOptions.create(broken_dir, tmp_path / "out", samples_path=samples_dir)
        batch = convert_directory(options)

        assert len(batch.converted) == 2
        assert [r.source.name for r in batch.failed] == ["Broken.exs"]
        assert "not an EXS file" in batch.failed[0].error

    def test_strict_raises(self, broken_dir, samples_dir, tmp_path):
        """Test that strict mode stops at the first failure."""
        options = ConvertOptions.create(broken_dir, tmp_path / "out", skip_errors=False, samples_path=samples_dir)

        with pytest.raises(EXSFormatError):
            convert_directory(options)

    def test_failed_output_rolled_back(self, tmp_path, samples_dir):
        """Test that a folder created for a failed instrument is removed."""
        source = tmp_path / "Lost.exs"
        source.write_bytes(
            EXSBuilder().add_group().add_zone().add_sample("gone", file_name="gone.wav").build()
        )
        output = tmp_path / "out"
        options = ConvertOptions.create(source, output, samples_path=samples_dir)
        result = convert_file(source, options)

        assert not result.success
        assert "no instruments found" in result.error
        assert not (output / "Lost").exists()

    def test_existing_output_kept(self, tmp_path, samples_dir):
        """Test that a pre-existing instrument folder survives a failure."""
        source = tmp_path / "Lost.exs"
        source.write_bytes(
            EXSBuilder().add_group().add_zone().add_sample("gone", file_name="gone.wav").build()
        )
        existing = tmp_path / "out" / "Lost"
        existing.mkdir(parents=True)
        (existing / "keep.txt").write_text("keep")
        options = ConvertOptions.create(source, tmp_path / "out", samples_path=samples_dir)

        assert not convert_file(source, options).success
        assert (existing / "keep.txt").exists()

    def test_single_file(self, instrument_dir, samples_dir, tmp_path):
        """Test converting one file with its own sample index."""
        options = ConvertOptions.create(instrument_dir / "Piano.exs", tmp_path / "out", samples_path=samples_dir)
        result = convert_file(instrument_dir / "Piano.exs", options)

        assert result.success
        assert result.output_dir == tmp_path / "out" / "Piano"
