import asyncio
import io
import unittest

from algebrapy import (
    AsyncIO, EffectMonad, logged_calculation,
    Runtime, Context, Effect, fail, succeed, sync, Failure,
)
from algebrapy.demo import report_async


class WrappedFailureIO(AsyncIO):
    """Calculate step dies with three wrappers around the real problem."""
    def calculate(self, sentence):
        def boom():
            try:
                try:
                    try:
                        raise KeyError("upstream")
                    except KeyError as e:
                        raise ValueError("decode") from e
                except ValueError as e:
                    raise RuntimeError("transport") from e
            except RuntimeError as e:
                raise LookupError("service") from e
        return sync(boom)


class TestRuntime(unittest.IsolatedAsyncioTestCase):
    async def test_run_success(self):
        v = await Runtime(Context()).run(succeed(2).map(lambda x: x + 5))
        self.assertEqual(v, 7)

    async def test_fiber_success_notifies_observer_before_await_returns(self):
        fiber = Runtime().fork(logged_calculation(AsyncIO(io.StringIO()), EffectMonad()))
        seen = []
        fiber.on_complete(seen.append)
        exit_ = await fiber.await_()
        self.assertEqual(len(seen), 1)
        self.assertIs(seen[0], exit_)
        self.assertTrue(exit_.success)
        self.assertEqual(exit_.value, "read from web service")
        self.assertEqual(fiber.status, "done")

    async def test_observer_after_completion_runs_immediately(self):
        fiber = Runtime().fork(succeed(1))
        await fiber.await_()
        seen = []
        fiber.on_complete(seen.append)
        self.assertEqual(seen[0].value, 1)

    async def test_fiber_failure_maps_to_cause_fail(self):
        fiber = Runtime().fork(fail("nope").annotate("step=calculate"))
        ex = await fiber.await_()
        self.assertFalse(ex.success)
        self.assertEqual(ex.cause.kind, "fail")
        self.assertEqual(ex.cause.error, "nope")
        self.assertEqual(ex.cause.annotations, ["step=calculate"])
        self.assertEqual(fiber.status, "failed")
        with self.assertRaises(Failure):
            await fiber.join()

    async def test_fiber_interrupt(self):
        async def slow(_: Context):
            await asyncio.sleep(1)
        fiber = Runtime().fork(Effect(slow))
        await asyncio.sleep(0)
        fiber.interrupt()
        ex = await fiber.await_()
        self.assertEqual(ex.cause.kind, "interrupt")
        self.assertEqual(fiber.status, "cancelled")

    async def test_await_after_task_already_finished(self):
        buf = io.StringIO(); seen = []
        fiber = Runtime().fork(logged_calculation(AsyncIO(buf), EffectMonad()))
        fiber.on_complete(seen.append)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        exit_ = await fiber.await_()
        self.assertTrue(exit_.success)
        self.assertEqual(exit_.value, "read from web service")
        self.assertEqual([e.value for e in seen], ["read from web service"])
        self.assertIs(await fiber.await_(), exit_)

    async def test_finished_failure_settles_once(self):
        fiber = Runtime().fork(fail("late"))
        await asyncio.sleep(0)
        seen = []
        fiber.on_complete(seen.append)
        exit_ = await fiber.await_()
        self.assertEqual(exit_.cause.error, "late")
        self.assertEqual(len(seen), 1)

    async def test_steps_complete_in_order(self):
        order = []
        async def step(name, delay):
            await asyncio.sleep(delay); order.append(name); return name
        eff = (Effect(lambda _: step("read", 0.02))
               .flat_map(lambda _: Effect(lambda _c: step("log", 0.0)))
               .flat_map(lambda _: Effect(lambda _c: step("calculate", 0.01))))
        await Runtime().run(eff)
        self.assertEqual(order, ["read", "log", "calculate"])


class TestAsyncFailureReport(unittest.IsolatedAsyncioTestCase):
    async def test_root_cause_is_printed_to_err(self):
        out, err = io.StringIO(), io.StringIO()
        fiber = Runtime().fork(logged_calculation(WrappedFailureIO(out), EffectMonad()))
        fiber.on_complete(report_async(out, err))
        exit_ = await fiber.await_()
        self.assertFalse(exit_.success)
        self.assertIsInstance(exit_.cause.root(), KeyError)
        text = err.getvalue()
        self.assertTrue(text.startswith("An error has occurred: \n"))
        self.assertIn("KeyError: 'upstream'", text)
        self.assertNotIn("LookupError", text)
        self.assertNotIn("loggedCalculation", out.getvalue())

    async def test_typed_failure_with_chained_exception_prints_root(self):
        transport = RuntimeError("transport")
        transport.__cause__ = KeyError("upstream")
        out, err = io.StringIO(), io.StringIO()
        fiber = Runtime().fork(fail(transport))
        fiber.on_complete(report_async(out, err))
        exit_ = await fiber.await_()
        self.assertEqual(exit_.cause.kind, "fail")
        text = err.getvalue()
        self.assertTrue(text.startswith("An error has occurred: \n"))
        self.assertIn("KeyError: 'upstream'", text)
        self.assertNotIn("transport", text)

    async def test_typed_failure_is_rendered(self):
        out, err = io.StringIO(), io.StringIO()
        fiber = Runtime().fork(fail("nope"))
        fiber.on_complete(report_async(out, err))
        await fiber.await_()
        self.assertIn("Fail('nope')", err.getvalue())

    async def test_success_is_printed_to_out(self):
        out, err = io.StringIO(), io.StringIO()
        report_async(out, err)(await Runtime().fork(succeed("r")).await_())
        self.assertEqual(out.getvalue(), "loggedCalculation[Effect] = r\n")
        self.assertEqual(err.getvalue(), "")
