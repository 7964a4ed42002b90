# ReadyPlan — Core Logic
#
# Lazy imports: HTTP and LLM clients load on first use.

__all__ = ["build_plan", "classify"]


def __getattr__(name: str):
    if name == "build_plan":
        from preparedness.planner import build_plan
        return build_plan
    if name == "classify":
        from preparedness.risk_classifier import classify
        return classify
    raise AttributeError(f"module 'preparedness' has no attribute {name!r}")
