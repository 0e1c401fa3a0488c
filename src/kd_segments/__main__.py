from kd_segments.main import run

run()
