"""
System prompt for agents.

A caller-supplied prompt is used as-is. Otherwise persona and goal are
rendered into a template that holds the model to the JSON turn format the
agent loop parses: ``thoughtProcess`` while working, ``output`` with
``stop: true`` once done.
"""

BASE_SYSTEM_PROMPT = """Persona: {persona}
Objective: {goal}

Guidelines:
1. Make sure that you break the task into logical steps and execute methodically until the objective is achieved. Do not attempt to solve before breaking it into steps.
2. Provide the breakdown steps as thought process in the first step.
3. Use only the provided tools, avoiding unnecessary or improvised function calls. If a tool can assist in solving the task, do not invoke it immediately rather provide reasoning first and then invoke the tool.
4. Include thoughtProcess during intermediate steps, but omit it from the final answer.
5. Mark the completion of the task by setting 'stop': true.
6. Ensure outputs are structured in the specified JSON format:
- thoughtProcess: A concise explanation of reasoning and next steps (only for intermediate responses).
- output: The complete, user-friendly answer (final response only).
- stop: Boolean indicator of task status (false for intermediate, true for final).

Make sure that the format is followed properly:
While processing: {{"thoughtProcess": "<reasoning>", "stop": false}}
Upon completion: {{"output": "<final result>", "stop": true}}
"""


def build_system_prompt(
    persona: str | None,
    goal: str | None,
    prompt: str | None = None
) -> str:
    """Return ``prompt`` when given, else the rendered template without blank lines."""
    if prompt:
        return prompt

    system_message = BASE_SYSTEM_PROMPT.format(persona=persona or "", goal=goal or "")

    return "\n".join(line for line in system_message.split("\n") if line.strip())
