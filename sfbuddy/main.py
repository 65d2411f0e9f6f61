import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from sfbuddy.api_keys import ApiKeysManager
from sfbuddy.catalog import load_catalog
from sfbuddy.config_loader import (
    PickerConfig,
    apply_settings_update,
    get_settings_summary,
    load_picker_config,
)
from sfbuddy.logic.categories import SymbolCategory, filter_symbols
from sfbuddy.models import (
    ApiKeyStatus,
    ApiKeyUpdate,
    CategoryInfo,
    ClaudeModel,
    CopyRequest,
    GridSize,
    RenderingMode,
    SettingsUpdate,
    SuggestionBatch,
    SuggestRequest,
    SymbolActionRecord,
    SymbolListResponse,
)
from sfbuddy.suggestion_service import SymbolSuggestionService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("sfbuddy")


def build_service(config: Optional[PickerConfig] = None) -> SymbolSuggestionService:
    """Wire the default service: YAML settings, catalog file, env key.

    Raises:
        CatalogNotConfiguredError: If no catalog file is configured.
    """
    config = config or load_picker_config()
    catalog = load_catalog(config.resolved_catalog_path())
    logger.info(f"Symbol picker ready: {len(catalog)} symbols, model {config.selected_model.display_name}")
    return SymbolSuggestionService(catalog=catalog, api_keys=ApiKeysManager(), config=config)


def get_service(request: Request) -> SymbolSuggestionService:
    return request.app.state.service


def _parse_category(category: str) -> SymbolCategory:
    try:
        return SymbolCategory(category)
    except ValueError:
        valid = [c.value for c in SymbolCategory]
        raise HTTPException(status_code=400, detail=f"Invalid category. Must be one of: {valid}")


def create_app(service: Optional[SymbolSuggestionService] = None) -> FastAPI:
    app = FastAPI(title="SF Buddy Symbol Picker API")
    app.state.service = service or build_service()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {"message": "SF Buddy Symbol Picker API is running"}

    @app.get("/health")
    async def health(svc: SymbolSuggestionService = Depends(get_service)):
        return {"status": "healthy", "catalog_size": len(svc.catalog)}

    # =========================================================================
    # BROWSING
    # =========================================================================

    @app.get("/categories", response_model=list[CategoryInfo])
    async def list_categories():
        return [
            CategoryInfo(id=c.value, display_name=c.display_name, system_image=c.system_image)
            for c in SymbolCategory
        ]

    @app.get("/symbols", response_model=SymbolListResponse)
    async def list_symbols(
        category: str = "all",
        search: str = "",
        svc: SymbolSuggestionService = Depends(get_service),
    ):
        selected = _parse_category(category)
        browser = svc.config.browser
        result = filter_symbols(
            svc.catalog.all_symbols(),
            category=selected,
            search_text=search,
            default_cap=browser.default_result_cap,
            search_cap=browser.search_result_cap,
        )
        return SymbolListResponse(
            category=selected.value,
            search=search,
            symbols=result.symbols,
            total_matches=result.total_matches,
            result_cap=result.result_cap,
        )

    @app.post("/symbols/copy", response_model=SymbolActionRecord)
    async def copy_symbol(request: CopyRequest, svc: SymbolSuggestionService = Depends(get_service)):
        if not svc.catalog.exists(request.symbol_name.strip()):
            raise HTTPException(status_code=404, detail=f"Symbol '{request.symbol_name}' not found")
        return svc.copy_symbol(request.symbol_name, request.search_term)

    @app.get("/symbols/{symbol_name}/actions", response_model=list[SymbolActionRecord])
    async def symbol_actions(symbol_name: str, svc: SymbolSuggestionService = Depends(get_service)):
        return svc.tracker.history(symbol_name)

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    @app.post("/suggestions", response_model=SuggestionBatch)
    async def suggest(request: SuggestRequest, svc: SymbolSuggestionService = Depends(get_service)):
        return await svc.process_text(request.text)

    @app.get("/suggestions/latest", response_model=SuggestionBatch)
    async def latest_suggestions(svc: SymbolSuggestionService = Depends(get_service)):
        return svc.latest

    # =========================================================================
    # SETTINGS
    # =========================================================================

    @app.get("/settings")
    async def get_settings(svc: SymbolSuggestionService = Depends(get_service)):
        return get_settings_summary(svc.config)

    @app.put("/settings")
    async def update_settings(update: SettingsUpdate, svc: SymbolSuggestionService = Depends(get_service)):
        try:
            svc.config = apply_settings_update(svc.config, update)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False, include_input=False))
        return get_settings_summary(svc.config)

    @app.get("/settings/api-key", response_model=ApiKeyStatus)
    async def api_key_status(svc: SymbolSuggestionService = Depends(get_service)):
        return svc.api_keys.get_status()

    @app.put("/settings/api-key", response_model=ApiKeyStatus)
    async def set_api_key(update: ApiKeyUpdate, svc: SymbolSuggestionService = Depends(get_service)):
        svc.api_keys.set_key(update.api_key)
        return svc.api_keys.get_status()

    @app.get("/models")
    async def list_models():
        return [
            {"id": m.value, "label": m.display_name, "description": m.description}
            for m in ClaudeModel
        ]

    @app.get("/grid-sizes")
    async def list_grid_sizes():
        return [
            {
                "id": g.value,
                "label": g.display_name,
                "columns": g.column_count,
                "icon": g.icon_name,
                "symbol_size": g.symbol_size,
                "button_size": list(g.button_size),
                "show_names": g.show_names,
            }
            for g in GridSize
        ]

    @app.get("/rendering-modes")
    async def list_rendering_modes():
        return [
            {"id": m.value, "label": m.display_name, "icon": m.icon_name}
            for m in RenderingMode
        ]

    return app


# Run with: SFBUDDY_CATALOG=/path/to/symbols.txt uvicorn sfbuddy.main:create_app --factory
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
