from __future__ import annotations

import logging
import os
import subprocess
from typing import List

from manim import (
    DOWN,
    UP,
    FadeIn,
    MathTex,
    Scene,
    Text,
    Transform,
    config,
)

# manim loads this file by path, so imports must be absolute.
from derivator.config import Config
from derivator.lexer import LexError
from derivator.parser import ParseError
from derivator.pipeline import Step, derive
from derivator.simplifier import EvaluationError
from derivator.tree import to_latex

EXPR_ENV = "DERIVATOR_EXPR"

logger = logging.getLogger(__name__)


def _fit_to_frame(mob: MathTex) -> None:
    max_width = config.frame_width * 0.9
    max_height = config.frame_height * 0.8
    if mob.width > max_width:
        mob.scale(max_width / mob.width)
    if mob.height > max_height:
        mob.scale(max_height / mob.height)
    mob.move_to([0, 0, 0])


def _title(text: str) -> Text:
    title = Text(text, font="Noto Sans", weight="BOLD")
    title.scale(0.45).to_edge(UP, buff=0.1)
    return title


class DeriveScene(Scene):
    def construct(self) -> None:
        expr = os.environ.get(EXPR_ENV, Config.EXPR)
        run_time = Config.ANIM_RUN_TIME

        title = _title("Step: input")
        label = Text(expr, font="Noto Sans")
        _fit_to_frame(label)
        self.play(FadeIn(title), FadeIn(label), run_time=run_time)

        try:
            steps = derive(expr, Config.VARIABLE)
        except (LexError, ParseError, EvaluationError) as exc:
            logger.error("cannot render %r: %s", expr, exc)
            error = Text(f"{type(exc).__name__}: {exc}", font="Noto Sans")
            error.scale(0.6).next_to(label, DOWN, buff=0.6)
            self.play(FadeIn(error), run_time=run_time)
            self.wait(Config.FINAL_WAIT)
            return

        for step in steps:
            new_label = MathTex(to_latex(step.expr))
            _fit_to_frame(new_label)
            self.play(
                Transform(title, _title(f"Step: {step.label}")),
                Transform(label, new_label),
                run_time=run_time,
            )

        self.wait(Config.FINAL_WAIT)


def render_list(steps: List[Step]) -> List[str]:
    return [f"Step {i} ({step.label}): {to_latex(step.expr)}" for i, step in enumerate(steps, start=1)]


def main() -> None:
    logging.basicConfig(level=Config.LOG_LEVEL, format="[%(name)s] [%(levelname)s] %(message)s")
    expr = input("Enter expression: ").strip() or Config.EXPR

    try:
        steps = derive(expr, Config.VARIABLE)
    except (LexError, ParseError, EvaluationError) as exc:
        print(f"error: {type(exc).__name__}: {exc}")
        steps = getattr(exc, "steps", [])

    print("RENDER_LIST:")
    for line in render_list(steps):
        print(line)

    env = os.environ.copy()
    env[EXPR_ENV] = expr

    cmd: List[str] = ["manim", Config.SCENE_QUALITY, os.path.abspath(__file__), Config.SCENE_NAME]
    subprocess.run(cmd, check=False, env=env)


if __name__ == "__main__":
    main()
