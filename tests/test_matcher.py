"""Node matching between frames."""

from framemotion.motion.matcher import MatchKind, index_nodes, match_nodes

from helpers import rect


def kinds(pairings):
    return [p.match for p in pairings]


# ---------------------------------------------------------------------------
# Name and identity matching
# ---------------------------------------------------------------------------


class TestMatching:

    def test_same_id_and_name_matches_by_name(self):
        pairings = match_nodes([rect("a", "Box")], [rect("a", "Box", x=10)])
        assert kinds(pairings) == [MatchKind.NAME]
        assert pairings[0].from_node.x == 0
        assert pairings[0].to_node.x == 10

    def test_renamed_node_matches_by_id(self):
        pairings = match_nodes([rect("a", "Old")], [rect("a", "New")])
        assert kinds(pairings) == [MatchKind.ID]
        assert pairings[0].is_matched

    def test_name_wins_over_id(self):
        """A name match across different ids is a stale duplicate."""
        pairings = match_nodes([rect("a", "Box")], [rect("b", "Box")])
        assert kinds(pairings) == [MatchKind.NAME]
        assert pairings[0].is_stale_duplicate

    def test_duplicate_names_pair_by_z_order(self):
        from_nodes = [rect("f2", "Dot", z_index=2), rect("f1", "Dot", z_index=1)]
        to_nodes = [rect("t1", "Dot", z_index=1), rect("t2", "Dot", z_index=2)]
        pairings = match_nodes(from_nodes, to_nodes)
        pairs = {(p.from_node.id, p.to_node.id) for p in pairings}
        assert pairs == {("f1", "t1"), ("f2", "t2")}

    def test_surplus_same_name_nodes_fall_through(self):
        """Extra nodes sharing a name become enter/exit pairings."""
        pairings = match_nodes(
            [rect("f1", "Dot", z_index=0)],
            [rect("t1", "Dot", z_index=0), rect("t2", "Dot", z_index=1)],
        )
        assert kinds(pairings) == [MatchKind.NAME, MatchKind.ENTER]
        assert pairings[1].to_node.id == "t2"

    def test_name_matched_node_is_not_reused_by_id(self):
        """A to-node consumed by a name match cannot also match by identity."""
        pairings = match_nodes(
            [rect("x", "Card", z_index=0), rect("y", "Label", z_index=1)],
            [rect("y", "Card", z_index=0)],
        )
        assert kinds(pairings) == [MatchKind.NAME, MatchKind.EXIT]
        assert pairings[0].from_node.id == "x"
        assert pairings[1].from_node.id == "y"


# ---------------------------------------------------------------------------
# Enter / exit
# ---------------------------------------------------------------------------


class TestEnterExit:

    def test_exit(self):
        pairings = match_nodes([rect("a", "Alpha")], [])
        assert kinds(pairings) == [MatchKind.EXIT]
        assert pairings[0].to_node is None
        assert pairings[0].node.id == "a"

    def test_enter(self):
        pairings = match_nodes([], [rect("a", "Alpha")])
        assert kinds(pairings) == [MatchKind.ENTER]
        assert pairings[0].from_node is None

    def test_empty_frames(self):
        assert match_nodes([], []) == []

    def test_every_node_appears_once(self):
        from_nodes = [rect("a", "A"), rect("b", "B"), rect("c", "C")]
        to_nodes = [rect("b", "B"), rect("d", "C"), rect("e", "E")]
        pairings = match_nodes(from_nodes, to_nodes)
        from_ids = [p.from_node.id for p in pairings if p.from_node]
        to_ids = [p.to_node.id for p in pairings if p.to_node]
        assert sorted(from_ids) == ["a", "b", "c"]
        assert sorted(to_ids) == ["b", "d", "e"]


# ---------------------------------------------------------------------------
# Ordering and indexing
# ---------------------------------------------------------------------------


class TestOrdering:

    def test_sorted_by_defining_node_z_index(self):
        pairings = match_nodes(
            [rect("gone", "Gone", z_index=5), rect("kept", "Kept", z_index=9)],
            [rect("kept", "Kept", z_index=1), rect("new", "New", z_index=3)],
        )
        assert [p.node.id for p in pairings] == ["kept", "new", "gone"]

    def test_sort_is_stable(self):
        pairings = match_nodes([], [rect("a", "A"), rect("b", "B"), rect("c", "C")])
        assert [p.node.id for p in pairings] == ["a", "b", "c"]

    def test_duplicate_ids_keep_later_node(self):
        index = index_nodes([rect("a", "First"), rect("a", "Second")])
        assert index["a"].name == "Second"
