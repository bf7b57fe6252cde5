"""Host front ends for edit sessions."""
