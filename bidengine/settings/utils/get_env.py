import os
import dj_database_url


class EnvHandler:
    """
    A class to handle fetching and casting environment variables.
    """

    def get(self, variable_name, default=None, cast_to=str):
        """
        Gets an environment variable with an optional default, type casting,
        and clear error handling for missing required variables.
        """
        value = os.environ.get(variable_name, default)

        if value is None:
            raise ValueError(
                f"Critical setting '{variable_name}' is not set in the environment!"
            )

        if cast_to is bool:
            return str(value).lower() in ["true", "1", "t", "yes"]

        try:
            return cast_to(value)
        except (ValueError, TypeError):
            raise TypeError(
                f"Could not cast environment variable '{variable_name}' to {cast_to.__name__}."
            )

    def list(self, variable_name, default=None, separator=","):
        """Comma separated environment variable as a list of stripped strings."""
        raw = self.get(variable_name, default=default, cast_to=str)
        return [item.strip() for item in raw.split(separator) if item.strip()]

    def db(self, variable_name="DATABASE_URL", default=None):
        """
        Fetches a database URL from the environment and parses it into a
        connection dictionary suitable for Django's DATABASES setting.
        """
        db_url_string = self.get(variable_name, default=default, cast_to=str)

        return dj_database_url.parse(
            db_url_string,
            conn_max_age=600,
            conn_health_checks=True,
        )


env = EnvHandler()
