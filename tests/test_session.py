"""
BrewSession: mutate-then-evaluate orchestration and listeners.
"""
import pytest

from core.alchemy import BrewSession, PlayerParams, PotionKind, SlotsFull


class TestBrewSession:

    def test_initial_result_is_no_potion(self):
        s = BrewSession()
        assert s.result.kind == PotionKind.NO_POTION
        assert s.params == PlayerParams(15, 0)
        assert s.rank == "Novice"

    def test_initial_params_are_clamped(self):
        assert BrewSession(PlayerParams(0, 9)).params == PlayerParams(1, 5)

    def test_add_re_evaluates(self, healers):
        s = BrewSession()
        assert s.add(healers[0]).kind == PotionKind.NO_POTION
        r = s.add(healers[1])
        assert r.kind == PotionKind.SUCCESS
        assert s.result is r

    def test_place_reports_slot(self, healers):
        s = BrewSession()
        assert s.place(healers[0])[0] == 0
        slot, r = s.place(healers[1])
        assert slot == 1
        assert r.kind == PotionKind.SUCCESS
        s.remove(0)
        assert s.place(healers[0])[0] == 0

    def test_remove_and_clear(self, healers):
        s = BrewSession()
        s.add(healers[0])
        s.add(healers[1])
        assert s.remove(0).kind == PotionKind.NO_POTION
        s.add(healers[0])
        assert s.result.kind == PotionKind.SUCCESS
        assert s.clear().kind == PotionKind.NO_POTION

    def test_set_params_re_evaluates(self, healers):
        s = BrewSession()
        s.add(healers[0])
        s.add(healers[1])
        r = s.set_params(level=100, perks=5)
        assert r.multiplier == 5.0
        assert s.rank == "Master"

    def test_set_params_partial_and_invalid_keep_current(self):
        s = BrewSession(PlayerParams(40, 2))
        s.set_params(perks=3)
        assert s.params == PlayerParams(40, 3)
        s.set_params(level="junk")
        assert s.params == PlayerParams(40, 3)
        s.set_params(level="0")
        assert s.params.level == 1

    def test_listeners_receive_each_result(self, healers):
        s = BrewSession()
        seen = []
        s.subscribe(seen.append)
        s.add(healers[0])
        s.add(healers[1])
        s.set_params(level=50)
        assert [r.kind for r in seen] == [PotionKind.NO_POTION, PotionKind.SUCCESS, PotionKind.SUCCESS]
        s.unsubscribe(seen.append)
        s.clear()
        assert len(seen) == 3

    def test_failed_mutation_does_not_notify(self, make_ingredient):
        s = BrewSession()
        for n in "ABC":
            s.add(make_ingredient(n, 1, "X"))
        seen = []
        s.subscribe(seen.append)
        with pytest.raises(SlotsFull):
            s.add(make_ingredient("D", 1, "X"))
        assert seen == []

    def test_snapshot(self, healers):
        s = BrewSession()
        s.add(healers[0])
        snap = s.snapshot()
        assert snap["slots"][0]["name"] == "Healer A"
        assert snap["slots"][1] is None
        assert snap["params"] == {"level": 15, "perks": 0}
        assert snap["rank"] == "Novice"
        assert snap["result"]["kind"] == "no_potion"
