"""Word memory and the call/operand stack."""
