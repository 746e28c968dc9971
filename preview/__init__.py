"""Preview package.

Headless components of the particle preview: drawing surfaces, frame
schedulers and the preview state machine. The Qt widget lives in qt/.
"""
