import threading

from tests.conftest import Position


def test_execute_defers_until_run_pending(world):
    ran = []
    world.execute(lambda: ran.append(1))

    assert ran == []
    assert world.pending == 1

    assert world.run_pending() == 1
    assert ran == [1]
    assert world.pending == 0


def test_tasks_run_in_submission_order(world):
    order = []
    for i in range(5):
        world.execute(lambda i=i: order.append(i))

    world.run_pending()

    assert order == [0, 1, 2, 3, 4]


def test_failing_task_is_logged_and_skipped(world, caplog):
    ran = []

    def boom():
        raise RuntimeError("task broke")

    world.execute(boom)
    world.execute(lambda: ran.append("after"))

    assert world.run_pending() == 2
    assert ran == ["after"]
    assert "task broke" in caplog.text


def test_tasks_from_other_threads_run_on_owner(world):
    seen = []

    def submit():
        world.execute(lambda: seen.append(world.in_world_thread()))
        world.execute(lambda: world.create_entity(Position(1, 1)))

    threads = [threading.Thread(target=submit) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    world.run_pending()

    assert seen == [True] * 4
    assert len(list(world.join(Position))) == 4
