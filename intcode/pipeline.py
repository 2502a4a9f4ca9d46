import logging
from typing import Iterable, List, Optional, Union

from intcode.errors import PipelineStalledError
from intcode.machine import Machine
from intcode.program_parser import parse_program

logger = logging.getLogger(__name__)


class Pipeline:
    """
    Chain of machines where each stage's outputs become the next stage's inputs.

    With `feedback` the last stage feeds the first one. Stages only exchange
    values through their queues; the pipeline moves them between `run()` calls.
    """

    def __init__(self, machines: List[Machine], feedback: bool = False):
        assert machines, "Pipeline needs at least one machine"
        self.machines = machines
        self.feedback = feedback
        self.outputs: List[int] = []
        self.rounds = 0

    @classmethod
    def from_program(cls, program: Union[str, Iterable[int]], phases: Iterable[int],
                     feedback: bool = False, capacity: int = 0) -> 'Pipeline':
        values = parse_program(program) if isinstance(program, str) else list(program)
        machines = []
        for phase in phases:
            machine = Machine(values, capacity)
            machine.push_input(phase)
            machines.append(machine)
        return cls(machines, feedback)

    def _route(self, stage: int, values: List[int]):
        if stage + 1 < len(self.machines):
            self.machines[stage + 1].push_input(*values)
        else:
            self.outputs.extend(values)
            if self.feedback:
                self.machines[0].push_input(*values)

    def run(self, signal: Optional[int] = 0) -> Optional[int]:
        """
        Drive every stage until all have halted.

        Returns the last value emitted by the final stage, or None if it never
        emitted anything. Raises PipelineStalledError if a round passes with no
        stage executing an instruction or emitting a value.
        """
        if signal is not None:
            self.machines[0].push_input(signal)
        while not all(m.halted for m in self.machines):
            self.rounds += 1
            progressed = False
            for stage, machine in enumerate(self.machines):
                steps_before = machine.executed_steps
                machine.run()
                values = machine.take_outputs()
                if values:
                    self._route(stage, values)
                if values or machine.executed_steps != steps_before:
                    progressed = True
            logger.debug("Pipeline round %d finished, %d values collected", self.rounds, len(self.outputs))
            if not progressed:
                waiting = [i for i, m in enumerate(self.machines) if not m.halted]
                raise PipelineStalledError(waiting)
        return self.outputs[-1] if self.outputs else None
