"""Tests for ops/sidecar_index.py -- OriginalName -> Location index."""

import pytest

from takeout_align.errors import FileOperationError, MetadataParseError
from takeout_align.models import Location
from takeout_align.ops.sidecar_index import build_index, read_original_name
from takeout_align.paths import PathSplitter

SIDECAR_TEMPLATE = """\
TakenAt: 2018-01-01T00:02:53Z
TakenSrc: meta
UID: pr2x3k1h8ozz3nmd
Type: image
OriginalName: {name}
"""


def write_sidecar(path, name):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SIDECAR_TEMPLATE.format(name=name))
    return path


@pytest.fixture
def sidecar_tree(tmp_path):
    """A PhotoPrism sidecar tree with a few year/month folders."""
    root = tmp_path / "sidecar"
    write_sidecar(
        root / "2018" / "01" / "20180101_000253_2C6CF514.yml", "IMG_20171231_160253871"
    )
    write_sidecar(
        root / "2020" / "05" / "20200516_132742_A1B2C3D4.yml", "VID_20200516_132742175"
    )
    write_sidecar(root / "2020" / "05" / "20200516_140000_FFFF0000.yml", "")
    # Not a sidecar
    (root / "2020" / "05" / "notes.txt").write_text("OriginalName: nope\n")
    (root / "2020" / "05" / "upper.YML").write_text("OriginalName: upper\n")
    return root


class TestReadOriginalName:
    def test_reads_name(self, tmp_path):
        sidecar = write_sidecar(tmp_path / "a.yml", "IMG_0001")
        assert read_original_name(sidecar) == "IMG_0001"

    def test_empty_value(self, tmp_path):
        sidecar = write_sidecar(tmp_path / "a.yml", "")
        assert read_original_name(sidecar) == ""

    @pytest.mark.parametrize("value", ["null", "Null", "NULL", "~"])
    def test_yaml_null_is_empty(self, tmp_path, value):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text(f"OriginalName: {value}\n")
        assert read_original_name(sidecar) == ""

    def test_quoted_null_is_a_name(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text('OriginalName: "null"\n')
        assert read_original_name(sidecar) == "null"

    def test_first_document_only(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("OriginalName: IMG_0001\n---\nOriginalName: IMG_0002\n")
        assert read_original_name(sidecar) == "IMG_0001"

    def test_missing_field(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("Type: image\n")
        assert read_original_name(sidecar) == ""

    def test_numeric_name_kept_literal(self, tmp_path):
        sidecar = write_sidecar(tmp_path / "a.yml", "0012345")
        assert read_original_name(sidecar) == "0012345"

    def test_malformed_yaml(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("OriginalName: [unclosed\n")
        with pytest.raises(MetadataParseError):
            read_original_name(sidecar)

    def test_empty_file(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("")
        with pytest.raises(MetadataParseError, match="empty document"):
            read_original_name(sidecar)

    def test_not_a_mapping(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("- one\n- two\n")
        with pytest.raises(MetadataParseError, match="mapping"):
            read_original_name(sidecar)

    def test_non_scalar_name(self, tmp_path):
        sidecar = tmp_path / "a.yml"
        sidecar.write_text("OriginalName:\n  - a\n  - b\n")
        with pytest.raises(MetadataParseError, match="OriginalName"):
            read_original_name(sidecar)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileOperationError) as exc_info:
            read_original_name(tmp_path / "missing.yml")
        assert exc_info.value.operation == "read"


class TestBuildIndex:
    def test_indexes_named_sidecars(self, sidecar_tree):
        index = build_index(sidecar_tree)
        assert index == {
            "IMG_20171231_160253871": Location(
                path="2018/01/", base="20180101_000253_2C6CF514"
            ),
            "VID_20200516_132742175": Location(
                path="2020/05/", base="20200516_132742_A1B2C3D4"
            ),
        }

    def test_locations_match_splitter(self, sidecar_tree):
        index = build_index(sidecar_tree)
        splitter = PathSplitter(sidecar_tree)
        for sidecar in sidecar_tree.rglob("*.yml"):
            name = read_original_name(sidecar)
            if name:
                assert index[name] == splitter.split(sidecar)

    def test_empty_names_absent(self, sidecar_tree):
        assert "" not in build_index(sidecar_tree)

    def test_other_extensions_ignored(self, sidecar_tree):
        index = build_index(sidecar_tree)
        assert "nope" not in index
        assert "upper" not in index

    def test_custom_extension(self, tmp_path):
        write_sidecar(tmp_path / "a.yaml", "IMG_0001")
        assert build_index(tmp_path, ".yaml") == {"IMG_0001": Location("", "a")}

    def test_duplicate_last_write_wins(self, tmp_path):
        write_sidecar(tmp_path / "2018" / "a.yml", "IMG_0001")
        write_sidecar(tmp_path / "2019" / "b.yml", "IMG_0001")
        index = build_index(tmp_path)
        # Walk order is sorted, so 2019 is visited last
        assert index["IMG_0001"] == Location(path="2019/", base="b")

    def test_null_names_not_indexed(self, tmp_path):
        (tmp_path / "a.yml").write_text("OriginalName: null\n")
        (tmp_path / "b.yml").write_text("OriginalName: ~\n")
        assert build_index(tmp_path) == {}

    def test_duplicate_winner_follows_lexical_walk(self, tmp_path):
        """a/x.yml sorts before b.yml, so b.yml is indexed last."""
        write_sidecar(tmp_path / "a" / "x.yml", "IMG")
        write_sidecar(tmp_path / "b.yml", "IMG")
        assert build_index(tmp_path)["IMG"] == Location(path="", base="b")

    def test_empty_tree(self, tmp_path):
        assert build_index(tmp_path) == {}

    def test_parse_error_aborts(self, sidecar_tree):
        (sidecar_tree / "2019").mkdir()
        (sidecar_tree / "2019" / "broken.yml").write_text("OriginalName: [\n")
        with pytest.raises(MetadataParseError):
            build_index(sidecar_tree)
