import pytest

from app.stores.sessions import SqlSessionStore
from app.stores.suggestions import SqlSuggestionStore
from app.stores.templates import SqlTemplateStore
from factories import performed, prescribed


@pytest.mark.asyncio
async def test_recent_completed_sessions_newest_first(gym, db):
    user = await gym.user()
    first = await gym.session(user)
    await gym.session(user, status="abandoned")
    second = await gym.session(user)
    await gym.session(user, status="in_progress")
    third = await gym.session(user)

    store = SqlSessionStore(db)
    assert await store.recent_completed_session_ids(user.id, 3) == [third.id, second.id, first.id]
    assert await store.recent_completed_session_ids(user.id, 1) == [third.id]


@pytest.mark.asyncio
async def test_history_merges_repeated_exercise(gym, db):
    user = await gym.user()
    bench = await gym.exercise()
    session = await gym.session(user)
    await gym.add_exercise(session, bench, performed(2, 8, 60.0))
    await gym.add_exercise(session, bench, performed(1, 6, 70.0), order_index=3)

    history = await SqlSessionStore(db).exercise_history(user.id, bench.id, 5)

    assert len(history) == 1
    assert [(s.target_reps, s.target_weight) for s in history[0].sets] == [(8, 60.0), (8, 60.0), (6, 70.0)]


@pytest.mark.asyncio
async def test_history_skips_sessions_without_exercise(gym, db):
    user = await gym.user()
    bench = await gym.exercise()
    curl = await gym.exercise("Curl", ["biceps"])
    with_bench = await gym.session(user, bench, performed(3, 8, 60.0))
    await gym.session(user, curl, performed(3, 12, 12.0))
    await gym.session(user, bench, performed(3, 8, 60.0), exercise_status="skipped")
    latest = await gym.session(user, bench, prescribed(3, 8, 60.0))

    store = SqlSessionStore(db)
    history = await store.exercise_history(user.id, bench.id, 5)
    assert [h.session_id for h in history] == [latest.id, with_bench.id]

    history = await store.exercise_history(user.id, bench.id, 5, exclude_session_id=latest.id)
    assert [h.session_id for h in history] == [with_bench.id]


@pytest.mark.asyncio
async def test_get_session_reads_sets_and_tags(gym, db):
    user = await gym.user()
    bench = await gym.exercise()
    session = await gym.session(user, bench, [(8, 60.0, 8, 62.5), (8, 60.0, None, None)], status="in_progress")

    record = await SqlSessionStore(db).get_session(session.id)

    assert record.user_id == user.id
    assert record.status == "in_progress"
    [ex] = record.exercises
    assert ex.muscle_groups == ("pectoraux", "triceps")
    assert ex.sets[0].actual_weight == 62.5
    assert not ex.sets[1].completed
    assert await SqlSessionStore(db).get_session(999) is None


@pytest.mark.asyncio
async def test_dismissed_lookup_is_scoped(gym, db):
    user = await gym.user()
    bench = await gym.exercise()
    curl = await gym.exercise("Curl", ["biceps"])
    s1 = await gym.session(user, bench, performed(3, 8, 60.0))
    s2 = await gym.session(user, curl, performed(3, 12, 12.0))
    await gym.suggestion(s1, bench, status="dismissed")
    await gym.suggestion(s2, curl, status="accepted")

    store = SqlSuggestionStore(db)
    assert await store.has_dismissed(user.id, bench.id, [s1.id, s2.id])
    assert not await store.has_dismissed(user.id, bench.id, [s2.id])
    assert not await store.has_dismissed(user.id, curl.id, [s1.id, s2.id])
    assert not await store.has_dismissed(user.id, bench.id, [])


@pytest.mark.asyncio
async def test_template_link_only_for_linked_exercise(gym, db):
    user = await gym.user()
    bench = await gym.exercise()
    curl = await gym.exercise("Curl", ["biceps"])
    t_ex = await gym.template_exercise(user, bench, [(8, 60.0)])
    session = await gym.session(user, bench, performed(1, 8, 60.0), template_exercise=t_ex)
    await gym.add_exercise(session, curl, performed(3, 12, 12.0), order_index=1)

    store = SqlTemplateStore(db)
    assert await store.find_template_exercise_id(session.id, bench.id) == t_ex.id
    assert await store.find_template_exercise_id(session.id, curl.id) is None
    assert await store.update_sets(t_ex.id) == 0
