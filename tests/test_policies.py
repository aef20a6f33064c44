"""Tests for inclusion and transform policies."""

import pytest

from fastq_filterer import (
    FastqRecord,
    FilterConfig,
    IdentityTransform,
    LengthAndTilePolicy,
    LengthPolicy,
    ReadPair,
    TruncateTransform,
    build_inclusion_policy,
    build_transform_policy,
    identity,
    length_and_tile,
    length_only,
    tile_id,
    truncate,
)

from conftest import make_record


def pair(seq1: str, seq2: str, tile: str = "1101") -> ReadPair:
    return ReadPair(make_record(seq1, tile=tile, mate=1), make_record(seq2, tile=tile, mate=2))


class TestLengthOnly:

    def test_short_mate2_excludes_pair(self):
        assert not length_only(pair("ACGTAC", "ACG"), threshold=5)

    def test_short_mate1_excludes_pair(self):
        assert not length_only(pair("ACG", "ACGTAC"), threshold=5)

    def test_both_long_enough(self):
        assert length_only(pair("ACGTAC", "ACGTAC"), threshold=5)

    def test_exactly_threshold_is_excluded(self):
        assert not length_only(pair("ACGTA", "ACGTAC"), threshold=5)
        assert length_only(pair("ACGTAC", "ACGTAC"), threshold=5)

    def test_zero_threshold_keeps_any_nonempty(self):
        assert length_only(pair("A", "C"), threshold=0)
        assert not length_only(pair("", "C"), threshold=0)

    @pytest.mark.parametrize("len1,len2,threshold", [
        (10, 10, 9), (10, 10, 10), (1, 50, 20), (50, 1, 20), (30, 31, 30),
    ])
    def test_threshold_law(self, len1, len2, threshold):
        expected = len1 > threshold and len2 > threshold
        assert length_only(pair("A" * len1, "C" * len2), threshold) == expected


class TestTileId:

    def test_illumina_header(self):
        assert tile_id("@INST:1:FLOW:2:1101:100:200\n") == "1101"

    def test_header_with_comment(self):
        assert tile_id("@INST:1:FLOW:2:2214:5:9 1:N:0:ACGT\n") == "2214"

    def test_short_header_has_no_tile(self):
        assert tile_id("@read_1\n") is None
        assert tile_id("@A:B:C:D\n") is None

    def test_five_field_header_keeps_terminator(self):
        assert tile_id("@A:B:C:D:1101\n") == "1101\n"


class TestLengthAndTile:

    def test_excluded_tile(self):
        assert not length_and_tile(pair("ACGTAC", "ACGTAC", tile="1101"), 5, {"1101"})

    def test_other_tile_kept(self):
        assert length_and_tile(pair("ACGTAC", "ACGTAC", tile="1102"), 5, {"1101"})

    def test_length_checked_first(self):
        assert not length_and_tile(pair("ACG", "ACGTAC", tile="1102"), 5, {"1101"})

    def test_only_mate1_header_used(self):
        r1 = make_record("ACGTAC", tile="1102")
        r2 = make_record("ACGTAC", tile="1101", mate=2)
        assert length_and_tile(ReadPair(r1, r2), 5, {"1101"})

    def test_short_header_is_kept(self):
        r1 = FastqRecord("@read_1\n", "ACGTAC\n", "+\n", "IIIIII\n")
        assert length_and_tile(ReadPair(r1, r1), 5, {"1101"})

    @pytest.mark.parametrize("seqs", [
        ("ACGTAC", "ACGTAC"), ("ACG", "ACGTAC"), ("ACGTAC", ""), ("ACGTA", "ACGTAC"),
    ])
    def test_empty_exclusion_set_matches_length_only(self, seqs):
        p = pair(*seqs)
        assert length_and_tile(p, 5, frozenset()) == length_only(p, 5)


class TestTruncate:

    def test_long_read_truncated(self):
        seq = ("ACGT" * 19)  # 76 residues
        rec = make_record(seq)
        out = truncate(rec, 50)
        assert out.sequence == seq[:50] + "\n"
        assert out.quality == "I" * 50 + "\n"
        assert out.header == rec.header
        assert out.strand == rec.strand

    def test_read_at_trim_length_untouched(self):
        rec = make_record("A" * 50)
        assert truncate(rec, 50) is rec

    def test_short_read_untouched(self):
        rec = make_record("A" * 20)
        assert truncate(rec, 50) is rec

    def test_one_over_trim_length_truncated(self):
        out = truncate(make_record("A" * 51), 50)
        assert out.sequence == "A" * 50 + "\n"

    def test_quality_cut_at_same_position(self):
        rec = FastqRecord("@r\n", "ACGTACGT\n", "+\n", "ABCDEFGH\n")
        out = truncate(rec, 3)
        assert out.sequence == "ACG\n"
        assert out.quality == "ABC\n"

    def test_identity(self):
        rec = make_record("ACGT")
        assert identity(rec) is rec


class TestPolicyClasses:

    def test_length_policy_callable(self):
        policy = LengthPolicy(5)
        assert policy(pair("ACGTAC", "ACGTAC"))
        assert not policy.keep(pair("ACGTAC", "ACG"))

    def test_tile_policy_stores_frozenset(self):
        policy = LengthAndTilePolicy(5, ["1101", "1102"])
        assert policy.tile_exclusion_set == frozenset({"1101", "1102"})
        assert not policy(pair("ACGTAC", "ACGTAC", tile="1102"))

    def test_truncate_transform(self):
        transform = TruncateTransform(4)
        assert transform(make_record("ACGTACGT")).sequence == "ACGT\n"

    def test_truncate_transform_rejects_negative(self):
        with pytest.raises(ValueError):
            TruncateTransform(-1)

    def test_build_inclusion_policy(self):
        assert type(build_inclusion_policy(FilterConfig(threshold=5))) is LengthPolicy
        policy = build_inclusion_policy(FilterConfig(threshold=5, tile_exclusion_set={"1101"}))
        assert isinstance(policy, LengthAndTilePolicy)

    def test_build_transform_policy(self):
        assert isinstance(build_transform_policy(None), IdentityTransform)
        transform = build_transform_policy(30)
        assert isinstance(transform, TruncateTransform)
        assert transform.trim_len == 30
