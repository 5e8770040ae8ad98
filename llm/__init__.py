from llm.backend import InferenceBackend, build_backend

__all__ = ["InferenceBackend", "build_backend"]
