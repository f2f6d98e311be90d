# Configuración general del auditor de llamadas condicionales.
# Las rutas relativas se resuelven contra el directorio de trabajo, igual que la
# herramienta de exportación que genera las tablas.

import os

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
GRAMMAR_PATH = os.path.join(PACKAGE_DIR, 'parser', 'grammar.lark')

# Convención del runtime de formularios
DEFAULT_NAMESPACE = "DV"
DEFAULT_METHODS = ["alert", "setFieldValue", "setFieldReadOnly", "setFieldVisible"]

# Tablas auxiliares (cabecera en la primera fila). La extensión elige el lector:
# ".csv" o ".xlsx" (primera hoja del libro).
DATA_DIR = "./output"
FUNCTION_REGISTRY_NAME = "handleFunction"
ATTRIBUTE_TABLE_DIR = "handleJspAttr"
TABLE_EXTENSION = ".csv"
TABLE_EXTENSIONS = [".csv", ".xlsx"]
TABLE_ENCODING = "utf-8-sig"

# Columnas del registro de funciones
REGISTRY_ID_COLUMN = "FuncId"
REGISTRY_TABLE_COLUMN = "JspFile"

# Columnas de las tablas de atributos
ATTRIBUTE_ID_COLUMN = "id"
ATTRIBUTE_TITLE_COLUMN = "title"

# Salida
OUTPUT_DIR = "./output"
RECORDS_BASENAME = "llamadas_condicionales"
