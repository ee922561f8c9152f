"""Tests for absent-field defaulting."""

from dataclasses import dataclass

from atviews.lexicon import (
    ActorViewerState,
    GeneratorView,
    ProfileAssociated,
    StarterPackView,
    UnknownVariant,
    decode_value,
    empty,
    flag,
    normalize,
)

from conftest import make_generator_view, make_starter_pack_view


@dataclass(frozen=True)
class _Sample:
    name: str
    tags: tuple = empty()
    enabled: bool = flag(True)
    nickname: str | None = None


class TestNormalize:
    """``None`` becomes the declared default only for declared fields."""

    def test_fills_declared_defaults(self):
        value = normalize(_Sample(name="x", tags=None, enabled=None))
        assert value.tags == ()
        assert value.enabled is True

    def test_tri_state_field_left_alone(self):
        assert normalize(_Sample(name="x")).nickname is None

    def test_unchanged_value_returned_as_is(self):
        sample = _Sample(name="x", tags=("a",))
        assert normalize(sample) is sample

    def test_counts_default_to_zero(self):
        assoc = normalize(ProfileAssociated(lists=None, feed_generators=None, starter_packs=3))
        assert (assoc.lists, assoc.feed_generators, assoc.starter_packs) == (0, 0, 3)

    def test_viewer_relationships_stay_tri_state(self):
        viewer = normalize(ActorViewerState(muted=None, blocked_by=None))
        assert viewer.muted is False
        assert viewer.blocked_by is False
        assert viewer.following is None
        assert viewer.blocking is None

    def test_recurses_into_tuples(self):
        outer = (_Sample(name="a", tags=None), _Sample(name="b"))
        result = normalize(outer)
        assert isinstance(result, tuple)
        assert result[0].tags == ()
        assert result[1] is outer[1]

    def test_recurses_into_nested_dataclasses(self):
        view = GeneratorView(uri="at://x", like_count=None, labels=None)
        assert normalize((view,))[0].like_count == 0

    def test_unknown_variant_untouched(self):
        v = UnknownVariant("app.example.future", {"labels": None})
        assert normalize(v) is v

    def test_scalars_pass_through(self):
        assert normalize("text") == "text"
        assert normalize(None) is None


class TestAbsentEqualsEmpty:
    """An absent optional array decodes the same as ``[]``."""

    def test_starter_pack_labels(self):
        absent = make_starter_pack_view()
        del absent["labels"]
        present = make_starter_pack_view(labels=[])

        a = decode_value(absent, StarterPackView.from_dict)
        b = decode_value(present, StarterPackView.from_dict)
        assert a.labels == ()
        assert a == b

    def test_generator_view_defaults(self):
        feed = decode_value(make_generator_view(), GeneratorView.from_dict)
        assert feed.labels == ()
        assert feed.description_facets == ()
        assert feed.accepts_interactions is False
        assert feed.viewer is None

    def test_starter_pack_counts(self):
        raw = make_starter_pack_view()
        for key in ("listItemCount", "joinedWeekCount", "joinedAllTimeCount"):
            del raw[key]
        pack = decode_value(raw, StarterPackView.from_dict)
        assert pack.list_item_count == 0
        assert pack.joined_week_count == 0
        assert pack.joined_all_time_count == 0
        assert pack.list_items_sample == ()
        assert pack.feeds == ()

    def test_decoded_views_are_hashable(self):
        pack = decode_value(make_starter_pack_view(), StarterPackView.from_dict)
        assert hash(pack) == hash(decode_value(make_starter_pack_view(), StarterPackView.from_dict))
