"""
Discrete-time simulator of single-core CPU scheduling (FCFS, SJF, SRTF).
"""
