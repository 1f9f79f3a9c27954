ASCII_PRINTABLE = "".join(chr(i) for i in range(32, 127))

# Ordered from darkest ink coverage to lightest, for dark text on a light background
DENSITY_RAMP = "@%#*+=-:. "
