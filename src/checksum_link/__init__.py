"""CRC-checked transmission of single data values between a sender and a receiver."""
