import io
import unittest
from contextlib import redirect_stdout, redirect_stderr

from algebrapy import Context, DemoConfig
from algebrapy.demo import main, main_async, run_async, run_identity, run_option
from algebrapy.dates import format_short, days_ago, days_from_now
from algebrapy.config import config_layer

LAST_TEN = "[937, 941, 947, 953, 967, 971, 977, 983, 991, 997]"


class TestDemo(unittest.IsolatedAsyncioTestCase):
    async def test_all_demos(self):
        out = io.StringIO()
        await main_async(DemoConfig(), out)
        lines = out.getvalue().splitlines()
        self.assertIn(f"loggedCalculation[Option] = Some('{LAST_TEN}')", lines)
        self.assertIn("AsyncIO log: read from web service", lines)
        self.assertIn("loggedCalculation[Effect] = read from web service", lines)
        self.assertIn("ConsoleIO log: Id ok", lines)
        self.assertIn("loggedCalculation[Id] = Id ok", lines)
        self.assertIn(format_short(days_ago(2)), lines)
        self.assertIn(format_short(days_from_now(5)), lines)
        self.assertLess(lines.index(f"loggedCalculation[Option] = Some('{LAST_TEN}')"),
                        lines.index("loggedCalculation[Effect] = read from web service"))

    async def test_selected_demos_only(self):
        out = io.StringIO()
        await main_async(DemoConfig(demos=("id",)), out)
        self.assertEqual(out.getvalue(), "\nConsoleIO log: Id ok\nloggedCalculation[Id] = Id ok\n")

    async def test_debug_logging_goes_to_stderr(self):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stderr(err):
            await main_async(DemoConfig(demos=("id",), log_level="DEBUG"), out)
        self.assertIn("demo start backend=asyncio demo=id", err.getvalue())
        self.assertIn("INFO: demo done", err.getvalue())
        self.assertNotIn("demo start", out.getvalue())

    async def test_async_demo_on_anyio_backend(self):
        out = io.StringIO()
        env = await config_layer(DemoConfig(backend="anyio")).build(Context())
        exit_ = await run_async(env, out=out)
        self.assertTrue(exit_.success)
        self.assertIn("loggedCalculation[Effect] = read from web service", out.getvalue())

    async def test_option_and_identity_results(self):
        out = io.StringIO()
        self.assertEqual(run_option(DemoConfig(prime_count=2), out).get(), "[991, 997]")
        self.assertEqual(run_identity(out), "Id ok")


class TestMain(unittest.TestCase):
    def test_main_prints_identity_demo(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["id"])
        self.assertEqual(code, 0)
        self.assertIn("loggedCalculation[Id] = Id ok", buf.getvalue())
