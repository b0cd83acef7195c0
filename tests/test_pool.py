"""Tests for the worker pool and its completion barrier."""

import threading

import pytest

from parsebench.aggregator import ResultCollector
from parsebench.models import PoolConfig
from parsebench.pool import WorkerPool
from parsebench.queues import WorkDispatcher


def _write_files(tmp_path, count):
    paths = []
    for i in range(count):
        path = tmp_path / f'file{i}.ts'
        path.write_bytes(b'token\n' * (i % 7 + 1))
        paths.append(str(path))
    return paths


class TestWorkerPool:
    @pytest.mark.parametrize('workers,files', [(1, 0), (1, 10), (4, 3), (12, 40)])
    def test_every_file_is_attempted_once(self, tmp_path, fake_parser_factory, workers, files):
        paths = _write_files(tmp_path, files)
        dispatcher = WorkDispatcher(paths)
        results = ResultCollector(len(paths))
        pool = WorkerPool(PoolConfig(worker_count=workers), fake_parser_factory)

        pool.start(dispatcher.queue, results)
        dispatcher.dispatch()
        attempted = pool.join()
        results.seal()

        records = list(results.drain())
        assert attempted == files
        assert sorted(r.path for r in records) == sorted(paths)
        assert len(fake_parser_factory.released) == files

    def test_one_parser_per_worker(self, tmp_path, fake_parser_cls):
        created = []
        lock = threading.Lock()

        def factory(language):
            with lock:
                created.append(threading.current_thread().name)
            return fake_parser_cls(language)

        dispatcher = WorkDispatcher(_write_files(tmp_path, 8))
        results = ResultCollector(8)
        pool = WorkerPool(PoolConfig(worker_count=4), factory)
        pool.start(dispatcher.queue, results)
        dispatcher.dispatch()
        pool.join()

        assert len(created) == 4
        assert len(set(created)) == 4
        assert all(name.startswith('ParseWorker') for name in created)

    def test_language_is_passed_to_factory(self, tmp_path, fake_parser_cls):
        languages = []

        def factory(language):
            languages.append(language)
            return fake_parser_cls(language)

        dispatcher = WorkDispatcher([])
        pool = WorkerPool(PoolConfig(worker_count=2, language='tsx'), factory)
        pool.start(dispatcher.queue, ResultCollector(1))
        dispatcher.dispatch()
        pool.join()

        assert languages == ['tsx', 'tsx']

    def test_workers_wait_for_late_dispatch(self, tmp_path, fake_parser_factory):
        paths = _write_files(tmp_path, 5)
        dispatcher = WorkDispatcher(paths)
        results = ResultCollector(len(paths))
        pool = WorkerPool(PoolConfig(worker_count=3), fake_parser_factory)

        pool.start(dispatcher.queue, results)
        # workers are idle on an empty, unsealed queue
        assert len(dispatcher.queue) == 0
        dispatcher.dispatch()
        assert pool.join() == 5

    def test_worker_crash_surfaces_at_join(self, tmp_path):
        def factory(language):
            raise RuntimeError('grammar failed to load')

        dispatcher = WorkDispatcher(_write_files(tmp_path, 2))
        pool = WorkerPool(PoolConfig(worker_count=2), factory)
        pool.start(dispatcher.queue, ResultCollector(2))
        dispatcher.dispatch()

        with pytest.raises(RuntimeError, match='grammar failed to load'):
            pool.join()

    def test_start_twice_is_an_error(self, fake_parser_factory):
        dispatcher = WorkDispatcher([])
        pool = WorkerPool(PoolConfig(worker_count=1), fake_parser_factory)
        pool.start(dispatcher.queue, ResultCollector(1))
        with pytest.raises(RuntimeError):
            pool.start(dispatcher.queue, ResultCollector(1))
        dispatcher.dispatch()
        pool.join()

    def test_join_before_start_is_an_error(self, fake_parser_factory):
        with pytest.raises(RuntimeError):
            WorkerPool(PoolConfig(worker_count=1), fake_parser_factory).join()
