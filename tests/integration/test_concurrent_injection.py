# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Integration tests for concurrent injection.

These tests verify:
- Many threads constructing instances through one shared engine
- Per-thread engines with independent prefixes
- Registration racing with injection
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
import threading

import pytest

from config_injection import ConfigProperty, InjectionEngine, ResolutionCache, ThreadLocalEngine
from sample_configs import Color, CustomConverter, CustomType, ExampleConfig, SetterConfig


class WorkerConfig:
    name: str = ConfigProperty("worker.name", default="worker")
    threads: int = ConfigProperty("worker.threads", default="4")
    ratio: float = ConfigProperty("worker.ratio", default="0.5")


@pytest.mark.integration()
@pytest.mark.concurrent()
class TestConcurrentInjection:
    """Test injection from many threads at once."""

    def test_shared_engine(self):
        """Test that every thread sees the same injected values."""
        engine = InjectionEngine(WorkerConfig)
        conf = {"worker.name": "pool", "worker.threads": "16", "worker.ratio": "0.75"}

        def build(_):
            config = WorkerConfig()
            engine.inject(config, conf)
            return config.name, config.threads, config.ratio

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(build, range(200)))

        assert set(results) == {("pool", 16, 0.75)}

    def test_constructor_injection(self, full_source):
        """Test classes injecting themselves through a thread-local engine."""

        def build(index):
            config = ExampleConfig(full_source)
            setter = SetterConfig({"foo": f"value-{index}"})
            return index, config, setter

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(build, i) for i in range(100)]
            for future in as_completed(futures):
                index, config, setter = future.result()
                assert config.int_value == 100
                assert config.color is Color.RED
                assert config.custom_value.value == "custom"
                assert setter.foo == f"value-{index}"

    def test_thread_local_prefixes(self):
        """Test that per-thread prefixes do not interfere."""
        local = ThreadLocalEngine(lambda: InjectionEngine(WorkerConfig))
        conf = {f"t{i}.worker.threads": str(i) for i in range(8)}
        barrier = threading.Barrier(8)
        results = {}

        def build(index):
            local.get().with_prefix(f"t{index}.")
            barrier.wait()
            config = WorkerConfig()
            local.inject(config, conf)
            results[index] = config.threads

        threads = [threading.Thread(target=build, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {i: i for i in range(8)}

    def test_registration_during_injection(self):
        """Test that injections stay consistent while a converter is registered."""
        engine = InjectionEngine(ExampleConfig)
        stop = threading.Event()
        errors = []

        def inject_loop():
            while not stop.is_set():
                config = ExampleConfig.__new__(ExampleConfig)
                try:
                    engine.inject(config, {"int_key": "7"})
                    assert config.int_value == 7
                except Exception as e:
                    errors.append(e)

        workers = [threading.Thread(target=inject_loop) for _ in range(4)]
        for worker in workers:
            worker.start()
        engine.register(CustomType, CustomConverter())
        stop.set()
        for worker in workers:
            worker.join()

        assert errors == []
        config = ExampleConfig.__new__(ExampleConfig)
        engine.inject(config, {})
        assert config.custom_value.value == "custom_default"

    def test_shared_cache_across_engines(self):
        """Test per-call engines sharing one resolution cache."""
        cache = ResolutionCache()

        def build(_):
            config = WorkerConfig()
            InjectionEngine(WorkerConfig, cache=cache).inject(config, {"worker.threads": "2"})
            return config.threads

        with ThreadPoolExecutor(max_workers=8) as executor:
            assert set(executor.map(build, range(100))) == {2}
        assert len(cache) == 1
