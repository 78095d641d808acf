"""Keep the rendered QR code in step with the content model."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .content import ContentKind, ContentModel, ErrorCorrection
from .encoder import encode, is_blank, is_ready
from .export import export_path
from .qr import PayloadTooLargeError, QRCodeManager, RenderError, RenderedImage
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderRequest:
    """A snapshot of everything needed to render one QR code."""

    generation: int
    kind: ContentKind
    payload: str
    error_correction: ErrorCorrection
    size: int


Dispatcher = Callable[[RenderRequest], None]
Listener = Callable[["RenderOrchestrator"], None]


class RenderOrchestrator:
    """Re-encode and re-render whenever the content model changes.

    By default requests are rendered synchronously.  A ``dispatch`` callable
    may be supplied to hand requests to a worker instead; the worker reports
    back through :meth:`deliver` or :meth:`fail`.  Only the most recent
    request may update the state, older results are dropped.
    """

    def __init__(
        self,
        model: ContentModel,
        manager: QRCodeManager,
        state: Optional[AppState] = None,
        dispatch: Optional[Dispatcher] = None,
        listener: Optional[Listener] = None,
    ) -> None:
        self._model = model
        self._manager = manager
        self._state = state if state is not None else AppState()
        self._dispatch = dispatch
        self._listener = listener
        self._generation = 0
        model.subscribe(self._on_model_changed)

    @property
    def model(self) -> ContentModel:
        return self._model

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def payload(self) -> str:
        return encode(self._model.kind, self._model.record)

    @property
    def ready(self) -> bool:
        return is_ready(self._model.kind, self._model.record)

    @property
    def image(self) -> Optional[RenderedImage]:
        return self._state.image

    @property
    def error(self) -> Optional[str]:
        return self._state.render_error

    @property
    def can_export(self) -> bool:
        """``True`` when the held image matches the current payload and settings."""

        image = self._state.image
        if not self.ready or image is None:
            return False
        settings = self._model.settings
        return (
            image.payload == self.payload
            and image.error_correction == settings.error_correction
            and image.size == settings.size
        )

    def _on_model_changed(self, _model: ContentModel) -> None:
        self.refresh()

    def _changed(self) -> None:
        if self._listener is not None:
            self._listener(self)

    def refresh(self) -> Optional[RenderRequest]:
        """Encode the active content and request a render if non-blank."""

        self._generation += 1
        payload = self.payload

        if is_blank(payload):
            self._state.clear_image()
            self._state.rendered_generation = self._generation
            self._changed()
            return None

        settings = self._model.settings
        request = RenderRequest(
            generation=self._generation,
            kind=self._model.kind,
            payload=payload,
            error_correction=settings.error_correction,
            size=settings.size,
        )

        if self._dispatch is None:
            self.render_now(request)
        else:
            self._dispatch(request)
        return request

    def render_now(self, request: RenderRequest) -> bool:
        """Render ``request`` on the calling thread and deliver the outcome."""

        try:
            image = self._manager.render(
                request.payload, request.error_correction, request.size
            )
        except Exception as exc:
            return self.fail(request, exc)
        return self.deliver(request, image)

    def _is_current(self, request: RenderRequest) -> bool:
        if request.generation != self._generation:
            logger.debug(
                "Dropping render %d, superseded by %d", request.generation, self._generation
            )
            return False
        return True

    def deliver(self, request: RenderRequest, image: RenderedImage) -> bool:
        """Publish ``image`` if ``request`` is still the latest one."""

        if not self._is_current(request):
            return False

        self._state.image = image
        self._state.render_error = None
        self._state.rendered_generation = request.generation
        self._changed()
        return True

    def fail(self, request: RenderRequest, error: BaseException) -> bool:
        """Record a render failure; the session continues without an image."""

        if not self._is_current(request):
            return False

        if isinstance(error, PayloadTooLargeError):
            message = str(error)
        else:
            message = f"QR generation failed: {error}"
        logger.warning(
            "Could not render %s payload (%s, %dpx): %s",
            request.kind.value,
            request.error_correction.value,
            request.size,
            error,
        )

        self._state.image = None
        self._state.render_error = message
        self._state.rendered_generation = request.generation
        self._changed()
        return True

    def export(self, path: str | Path | None = None, directory: str | Path = ".") -> Path:
        """Write the current QR code as PNG.

        Without ``path`` the file is named after the active kind, for example
        ``qr-code-url.png`` inside ``directory``.
        """

        image = self._state.image
        if not self.can_export or image is None:
            raise RenderError("No QR code to export")

        if path is None:
            path = export_path(directory, self._model.kind, self._manager.config.export_prefix)

        return self._manager.save_png(image, path)


__all__ = ["RenderOrchestrator", "RenderRequest"]
