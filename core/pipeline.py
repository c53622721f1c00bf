"""Shared request/processor/producer scaffolding."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar


PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None
    error: Optional[BaseException] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"


class Processor(Protocol[PayloadT, ResultT]):
    def process(self, payload: PayloadT) -> ResultT:
        ...


class Producer(Protocol[ResultT]):
    def produce(self, result: ResultT) -> None:
        ...


class BaseProducer:
    """Base class for pipeline producers.

    Subclasses override _produce_success(); failed envelopes are left to the
    caller, which reports the carried error.
    """

    def produce(self, result: ResultEnvelope) -> None:
        if result.ok() and result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        """Override in subclass to handle successful result output."""
        raise NotImplementedError("Subclass must implement _produce_success")


def run_pipeline(request: Any, processor: Processor, producer: Producer) -> ResultEnvelope:
    """Process a request, hand the envelope to the producer and return it.

    Errors captured by the processor stay in ``envelope.error`` so the command
    boundary can report them and pick the exit code.
    """
    envelope = processor.process(request)
    producer.produce(envelope)
    return envelope
