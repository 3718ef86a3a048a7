import asyncio
import threading
import unittest

from display_stocks.services.timers import AsyncioTimers, ManualTimers


class AsyncioTimersTest(unittest.TestCase):
    def test_submit_runs_off_loop_and_delivers_on_loop(self):
        async def scenario():
            timers = AsyncioTimers()
            done = asyncio.Event()
            seen = {}

            def on_done(result, exc):
                seen["result"] = result
                seen["exc"] = exc
                seen["thread"] = threading.get_ident()
                done.set()

            timers.submit(threading.get_ident, on_done)
            await asyncio.wait_for(done.wait(), 1.0)
            return threading.get_ident(), seen

        loop_thread, seen = asyncio.run(scenario())

        self.assertIsNone(seen["exc"])
        self.assertNotEqual(seen["result"], loop_thread)
        self.assertEqual(seen["thread"], loop_thread)

    def test_submit_delivers_exceptions(self):
        async def scenario():
            timers = AsyncioTimers()
            done = asyncio.Event()
            seen = {}

            def boom():
                raise ConnectionError("down")

            def on_done(result, exc):
                seen["result"] = result
                seen["exc"] = exc
                done.set()

            timers.submit(boom, on_done)
            await asyncio.wait_for(done.wait(), 1.0)
            return seen

        seen = asyncio.run(scenario())

        self.assertIsNone(seen["result"])
        self.assertIsInstance(seen["exc"], ConnectionError)

    def test_call_every_repeats_until_cancelled(self):
        async def scenario():
            timers = AsyncioTimers()
            ticks = []
            reached = asyncio.Event()

            def tick():
                ticks.append(1)
                if len(ticks) == 3:
                    reached.set()

            handle = timers.call_every(0.01, tick)
            await asyncio.wait_for(reached.wait(), 1.0)
            handle.cancel()
            await asyncio.sleep(0.05)
            return len(ticks)

        self.assertEqual(asyncio.run(scenario()), 3)


class ManualTimersTest(unittest.TestCase):
    def test_callbacks_fire_in_due_order(self):
        timers = ManualTimers()
        fired = []
        timers.call_later(2.0, lambda: fired.append("b"))
        timers.call_later(1.0, lambda: fired.append("a"))
        timers.call_later(5.0, lambda: fired.append("c"))

        timers.advance(2.0)

        self.assertEqual(fired, ["a", "b"])
        self.assertEqual(timers.pending_delays(), [3.0])

    def test_cancelled_callbacks_do_not_fire(self):
        timers = ManualTimers()
        fired = []
        handle = timers.call_later(1.0, lambda: fired.append(1))

        handle.cancel()
        timers.advance(10.0)

        self.assertEqual(fired, [])

    def test_held_submissions_wait_for_completion(self):
        timers = ManualTimers(hold_submissions=True)
        results = []

        timers.submit(lambda: 42, lambda result, exc: results.append((result, exc)))
        self.assertEqual(results, [])

        self.assertEqual(timers.complete_submissions(), 1)
        self.assertEqual(results, [(42, None)])


if __name__ == "__main__":
    unittest.main()
