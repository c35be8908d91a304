import unittest
from unittest import mock

import console_play


class TestConsolePlay(unittest.TestCase):
    def run_with_input(self, side_effect):
        with mock.patch("builtins.input", side_effect=side_effect) as fake_input, \
                mock.patch("builtins.print"):
            console_play.main()
        return fake_input

    def test_quit_command(self):
        fake_input = self.run_with_input(["q"])
        self.assertEqual(fake_input.call_count, 1)

    def test_end_of_input_leaves_loop(self):
        fake_input = self.run_with_input(["u", EOFError()])
        self.assertEqual(fake_input.call_count, 2)

    def test_ctrl_c_leaves_loop(self):
        fake_input = self.run_with_input([KeyboardInterrupt()])
        self.assertEqual(fake_input.call_count, 1)

    def test_bad_command_keeps_prompting(self):
        fake_input = self.run_with_input(["x", "s 2x2x2", EOFError()])
        self.assertEqual(fake_input.call_count, 3)


if __name__ == '__main__':
    unittest.main()
