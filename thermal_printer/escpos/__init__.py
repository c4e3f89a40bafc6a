"""ESC/POS protocol layer: command encoders live in :mod:`thermal_printer.escpos.commands`."""
