import os


class Config:
    LOG_LEVEL = os.environ.get("DERIVATOR_LOG_LEVEL", "WARNING").upper()
    EXPR = os.environ.get("DERIVATOR_EXPR") or "x^2 * sin(x)"
    # Empty means every variable differentiates to 1.
    VARIABLE = os.environ.get("DERIVATOR_VARIABLE") or None
    MAX_PASSES = int(os.environ.get("DERIVATOR_MAX_PASSES", 1000))

    PROMPT = ">>> "
    EXIT_COMMAND = "exit"

    # manim rendering
    SCENE_NAME = "DeriveScene"
    SCENE_QUALITY = os.environ.get("DERIVATOR_SCENE_QUALITY", "-pqh")
    ANIM_RUN_TIME = 1.2
    FINAL_WAIT = 2.0
