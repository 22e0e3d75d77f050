import unittest

from algebrapy.cause import Failure, Cause, Exit, root_cause, format_root_cause


def nested(depth: int) -> BaseException:
    """Raise ``depth`` wrappers around a KeyError and return the outermost."""
    def level(n: int):
        if n == 0:
            raise KeyError("innermost")
        try:
            level(n - 1)
        except Exception as e:
            raise RuntimeError(f"wrapper {n}") from e
    try:
        level(depth)
    except Exception as e:
        return e
    raise AssertionError("unreachable")


class TestRootCause(unittest.TestCase):
    def test_three_wrappers_returns_fourth(self):
        outer = nested(3)
        root = root_cause(outer)
        self.assertIsInstance(root, KeyError)
        self.assertEqual(root.args, ("innermost",))

    def test_no_cause_returns_itself(self):
        ex = ValueError("alone")
        self.assertIs(root_cause(ex), ex)

    def test_implicit_context_is_not_a_cause(self):
        try:
            try:
                raise KeyError("first")
            except KeyError:
                raise ValueError("second")
        except ValueError as e:
            self.assertIs(root_cause(e), e)

    def test_failure_wrapping_exception(self):
        inner = OSError("disk")
        self.assertIs(root_cause(Failure(inner)), inner)
        plain = Failure("not an exception")
        self.assertIs(root_cause(plain), plain)

    def test_deep_chain_does_not_overflow(self):
        ex = ValueError("bottom")
        for i in range(5000):
            wrapper = RuntimeError(i); wrapper.__cause__ = ex; ex = wrapper
        self.assertEqual(str(root_cause(ex)), "bottom")

    def test_cycle_terminates(self):
        a = ValueError("a"); b = ValueError("b")
        a.__cause__ = b; b.__cause__ = a
        self.assertIs(root_cause(a), b)

    def test_format_root_cause(self):
        text = format_root_cause(nested(2))
        self.assertIn("KeyError: 'innermost'", text)
        self.assertNotIn("wrapper", text)


class TestCauseAndExit(unittest.TestCase):
    def test_from_exception(self):
        ex = Exit.from_exception(Failure("nope", annotations=["op=x"]))
        self.assertFalse(ex.success)
        self.assertEqual(ex.cause.kind, "fail")
        self.assertEqual(ex.cause.error, "nope")
        self.assertIn("@ op=x", ex.cause.render())
        die = Exit.from_exception(nested(1))
        self.assertEqual(die.cause.kind, "die")
        self.assertIsInstance(die.cause.root(), KeyError)

    def test_render_kinds(self):
        self.assertEqual(Cause.fail("e").render(), "Fail('e')\n")
        self.assertEqual(Cause.interrupt().render(), "Interrupt\n")
        self.assertIsNone(Cause.interrupt().root())
        self.assertTrue(Cause.die(ValueError("x")).render(include_traces=False).startswith("Die(ValueError('x'))"))
