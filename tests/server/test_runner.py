import threading

from torchlight.server.runner import WorldRunner


def test_tick_drains_world_tasks(overworld):
    runner = WorldRunner(overworld)
    ran = []
    overworld.execute(lambda: ran.append(1))

    runner.tick()

    assert ran == [1]
    assert runner.ticks == 1


def test_runner_thread_owns_the_world(overworld):
    runner = WorldRunner(overworld, tps=200)
    done = threading.Event()
    owners = []

    def task():
        owners.append(threading.current_thread().name)
        done.set()

    runner.start()
    try:
        overworld.execute(task)
        assert done.wait(timeout=2.0)
    finally:
        runner.stop()

    assert owners == [f"World-{overworld.name}"]
    assert not runner.running


def test_stop_flushes_remaining_tasks(overworld):
    runner = WorldRunner(overworld)
    ran = []
    overworld.execute(lambda: ran.append("late"))

    runner.stop()

    assert ran == ["late"]
