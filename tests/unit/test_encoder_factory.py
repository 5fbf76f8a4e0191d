"""Tests for encoder selection."""

from finassist_ml.config.settings import Settings
from finassist_ml.inference import (
    HashedEmbeddingEncoder,
    RemoteEmbeddingEncoder,
    create_encoder,
)


class TestCreateEncoder:
    """Tests for create_encoder."""

    def test_hashed_without_key(self, settings: Settings) -> None:
        """No credential selects the hashed encoder."""
        encoder = create_encoder(settings)
        assert isinstance(encoder, HashedEmbeddingEncoder)
        assert encoder.dimension == 384

    def test_remote_with_key(self) -> None:
        """A usable credential selects the remote provider."""
        settings = Settings(
            _env_file=None, embedding_api_key="sk-live", embedding_dimension=256
        )
        encoder = create_encoder(settings)
        try:
            assert isinstance(encoder, RemoteEmbeddingEncoder)
            assert encoder.dimension == 256
            assert encoder.model_name == "text-embedding-3-small"
        finally:
            encoder.close()

    def test_placeholder_key_counts_as_absent(self) -> None:
        """The sample-file placeholder never reaches the provider."""
        settings = Settings(_env_file=None, embedding_api_key="your_openai_api_key")
        assert isinstance(create_encoder(settings), HashedEmbeddingEncoder)
