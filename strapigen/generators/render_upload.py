"""Upload helpers: a browser-side upload client and an Astro form action."""
from __future__ import annotations

from strapigen.generators.ir import CodeDecl, Field, InterfaceDecl, ModuleIR
from strapigen.generators.paths import UPLOAD_ACTION, UPLOAD_CLIENT, UTILS, ModuleResolver
from strapigen.generators.types import GenerationOptions


def _env(options: GenerationOptions, name: str) -> str:
    if options.commonjs:
        return f"process.env.{name}"
    return f"import.meta.env.{name}"


def _upload_url(options: GenerationOptions) -> str:
    return f"`${{strapiUrl}}{options.api_prefix}/upload`"


def render_upload_client(options: GenerationOptions, resolver: ModuleResolver) -> ModuleIR:
    ts = options.typescript
    module = ModuleIR(header=(
        "Strapi upload client",
        "Safe for the browser: only PUBLIC_ variables are read",
        "Generated by strapigen",
    ))
    module.add_import(resolver.specifier(UPLOAD_CLIENT, UTILS), "StrapiMedia", type_only=True)
    module.add(CodeDecl(
        f"const strapiUrl = {_env(options, 'PUBLIC_STRAPI_URL')} || 'http://localhost:1337';\n"
        f"const uploadToken = {_env(options, 'PUBLIC_STRAPI_UPLOAD_TOKEN')};"
    ))
    module.add(InterfaceDecl("UploadOptions", (
        Field("ref", "string", optional=True, doc="uid of the entry's content type"),
        Field("refId", "string | number", optional=True),
        Field("field", "string", optional=True),
        Field("fileInfo", "{ name?: string; alternativeText?: string; caption?: string }", optional=True),
    )))

    files_sig = (
        "async function uploadFiles(files: (File | Blob)[], options: UploadOptions = {}): Promise<StrapiMedia[]> {"
        if ts else "async function uploadFiles(files, options = {}) {"
    )
    result = "(await response.json()) as StrapiMedia[]" if ts else "/** @type {StrapiMedia[]} */ (await response.json())"
    module.add(CodeDecl(
        f"{files_sig}\n"
        "  const form = new FormData();\n"
        "  for (const file of files) form.append('files', file);\n"
        "  if (options.ref) form.append('ref', options.ref);\n"
        "  if (options.refId !== undefined) form.append('refId', String(options.refId));\n"
        "  if (options.field) form.append('field', options.field);\n"
        "  if (options.fileInfo) form.append('fileInfo', JSON.stringify(options.fileInfo));\n"
        "\n"
        f"  const response = await fetch({_upload_url(options)}, {{\n"
        "    method: 'POST',\n"
        "    headers: uploadToken ? { Authorization: `Bearer ${uploadToken}` } : {},\n"
        "    body: form,\n"
        "  });\n"
        "  if (!response.ok) {\n"
        "    throw new Error(`Upload failed: ${response.status} ${await response.text()}`);\n"
        "  }\n"
        f"  return {result};\n"
        "}",
        exports=("uploadFiles",),
        doc=() if ts else (
            "@param {(File | Blob)[]} files",
            "@param {UploadOptions} [options]",
            "@returns {Promise<StrapiMedia[]>}",
        ),
    ))
    file_sig = (
        "async function uploadFile(file: File | Blob, options: UploadOptions = {}): Promise<StrapiMedia> {"
        if ts else "async function uploadFile(file, options = {}) {"
    )
    module.add(CodeDecl(
        f"{file_sig}\n  const [media] = await uploadFiles([file], options);\n  return media;\n}}",
        exports=("uploadFile",),
        doc=() if ts else (
            "@param {File | Blob} file",
            "@param {UploadOptions} [options]",
            "@returns {Promise<StrapiMedia>}",
        ),
    ))
    return module


def render_upload_action(options: GenerationOptions, resolver: ModuleResolver) -> ModuleIR:
    ts = options.typescript
    module = ModuleIR(header=(
        "Astro upload action",
        "Runs on the server with STRAPI_TOKEN",
        "Generated by strapigen",
    ))
    module.add_import("astro:actions", "defineAction")
    module.add_import("astro:schema", "z")
    module.add_import(resolver.specifier(UPLOAD_ACTION, UTILS), "StrapiMedia", type_only=True)

    env_url = "process.env.STRAPI_URL" if options.commonjs else "import.meta.env.STRAPI_URL || process.env.STRAPI_URL"
    env_token = "process.env.STRAPI_TOKEN" if options.commonjs else "import.meta.env.STRAPI_TOKEN || process.env.STRAPI_TOKEN"
    module.add(CodeDecl(
        f"const strapiUrl = {env_url} || 'http://localhost:1337';\n"
        f"const strapiToken = {env_token};"
    ))
    result = "(await response.json()) as StrapiMedia[]" if ts else "/** @type {StrapiMedia[]} */ (await response.json())"
    module.add(CodeDecl(
        "const uploadAction = defineAction({\n"
        "  accept: 'form',\n"
        "  input: z.object({\n"
        "    file: z.instanceof(File),\n"
        "    alternativeText: z.string().optional(),\n"
        "    caption: z.string().optional(),\n"
        "  }),\n"
        "  handler: async (input) => {\n"
        "    const form = new FormData();\n"
        "    form.append('files', input.file);\n"
        "    if (input.alternativeText || input.caption) {\n"
        "      form.append('fileInfo', JSON.stringify({ alternativeText: input.alternativeText, caption: input.caption }));\n"
        "    }\n"
        f"    const response = await fetch({_upload_url(options)}, {{\n"
        "      method: 'POST',\n"
        "      headers: strapiToken ? { Authorization: `Bearer ${strapiToken}` } : {},\n"
        "      body: form,\n"
        "    });\n"
        "    if (!response.ok) {\n"
        "      throw new Error(`Upload failed: ${response.status} ${await response.text()}`);\n"
        "    }\n"
        f"    const [media] = {result};\n"
        "    return media;\n"
        "  },\n"
        "});",
        exports=("uploadAction",),
    ))
    return module
