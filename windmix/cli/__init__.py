from windmix.cli import windmix, windmix_run, windmix_copy_setup, windmix_profiles

windmix.cli.add_command(windmix_run.cli, "run")
windmix.cli.add_command(windmix_copy_setup.cli, "copy-setup")
windmix.cli.add_command(windmix_profiles.cli, "profiles")
