"""CPU core: register file, operand decoder, ALU."""
