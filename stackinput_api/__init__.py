"""stackinput_api - REST API for rendering and validating stackinput inputs."""
