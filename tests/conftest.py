import pytest

from sketchlogic.parser import parse_block_records

# An if-else chain with nested substacks and reporter arguments
IF_ELSE_RECORDS = r'''{"color":-1988310,"id":"14","nextBlock":25,"opCode":"ifElse","parameters":["@19"],"spec":"if %b then","subStack1":40,"subStack2":43,"type":"e","typeName":""}
{"color":-10701022,"id":"19","nextBlock":-1,"opCode":"\u003e","parameters":["@20","0"],"spec":"%d \u003e %d","subStack1":-1,"subStack2":-1,"type":"b","typeName":""}
{"color":-3384542,"id":"20","nextBlock":-1,"opCode":"lengthList","parameters":["webviews"],"spec":"length of %m.list","subStack1":-1,"subStack2":-1,"type":"d","typeName":""}
{"color":-11899692,"id":"40","nextBlock":41,"opCode":"setVisible","parameters":["linear_notab","GONE"],"spec":"%m.view setVisible %m.visible","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"41","nextBlock":-1,"opCode":"setVisible","parameters":["listview1","VISIBLE"],"spec":"%m.view setVisible %m.visible","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"43","nextBlock":42,"opCode":"setVisible","parameters":["listview1","GONE"],"spec":"%m.view setVisible %m.visible","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"42","nextBlock":-1,"opCode":"setVisible","parameters":["linear_notab","VISIBLE"],"spec":"%m.view setVisible %m.visible","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-1988310,"id":"25","nextBlock":-1,"opCode":"ifElse","parameters":["@26"],"spec":"if %b then","subStack1":21,"subStack2":36,"type":"e","typeName":""}
{"color":-10701022,"id":"26","nextBlock":-1,"opCode":"\u003e","parameters":["@27","99"],"spec":"%d \u003e %d","subStack1":-1,"subStack2":-1,"type":"b","typeName":""}
{"color":-3384542,"id":"27","nextBlock":-1,"opCode":"lengthList","parameters":["webviews"],"spec":"length of %m.list","subStack1":-1,"subStack2":-1,"type":"d","typeName":""}
{"color":-11899692,"id":"21","nextBlock":39,"opCode":"setText","parameters":["textview_tabs",":D"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"39","nextBlock":-1,"opCode":"setText","parameters":["textview1",":D"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"36","nextBlock":15,"opCode":"setText","parameters":["textview_tabs","@37"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-10701022,"id":"37","nextBlock":-1,"opCode":"toString","parameters":["@38"],"spec":"toString %d without decimal","subStack1":-1,"subStack2":-1,"type":"s","typeName":""}
{"color":-3384542,"id":"38","nextBlock":-1,"opCode":"lengthList","parameters":["webviews"],"spec":"length of %m.list","subStack1":-1,"subStack2":-1,"type":"d","typeName":""}
{"color":-11899692,"id":"15","nextBlock":-1,"opCode":"setText","parameters":["textview1","@17"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-10701022,"id":"17","nextBlock":-1,"opCode":"toString","parameters":["@18"],"spec":"toString %d without decimal","subStack1":-1,"subStack2":-1,"type":"s","typeName":""}
{"color":-3384542,"id":"18","nextBlock":-1,"opCode":"lengthList","parameters":["webviews"],"spec":"length of %m.list","subStack1":-1,"subStack2":-1,"type":"d","typeName":""}'''

# A complete logic file with metadata sections, an event and a moreblock body
LOGIC_TEXT = r'''@MainActivity.java_var
2:out

@MainActivity.java_func
execute_shell:execute_shell %s.command

@MainActivity.java_onCreate_initializeLogic
{"color":-10701022,"id":"12","nextBlock":10,"opCode":"addSourceDirectly","parameters":["// For those who are familiar with Linux commands, we\u0027re reading /proc/cpuinfo, and /proc/meminfo"],"spec":"add source directly %s.inputOnly","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-7711273,"id":"10","nextBlock":13,"opCode":"definedFunc","parameters":["cat /proc/cpuinfo"],"spec":"execute_shell %s.command","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"13","nextBlock":11,"opCode":"setText","parameters":["cpuinfo","@16"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-1147626,"id":"16","nextBlock":-1,"opCode":"getVar","parameters":[],"spec":"out","subStack1":-1,"subStack2":-1,"type":"s","typeName":""}
{"color":-7711273,"id":"11","nextBlock":14,"opCode":"definedFunc","parameters":["cat /proc/meminfo"],"spec":"execute_shell %s.command","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-11899692,"id":"14","nextBlock":-1,"opCode":"setText","parameters":["raminfo","@15"],"spec":"%m.textview setText %s","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
{"color":-1147626,"id":"15","nextBlock":-1,"opCode":"getVar","parameters":[],"spec":"out","subStack1":-1,"subStack2":-1,"type":"s","typeName":""}

@MainActivity.java_execute_shell_moreBlock
{"color":-10701022,"id":"10","nextBlock":-1,"opCode":"addSourceDirectly","parameters":["StringBuilder output \u003d new StringBuilder();\ntry {\njava.lang.Process cmdProc \u003d Runtime.getRuntime().exec(_command);\n\n\njava.io.BufferedReader stdoutReader \u003d new java.io.BufferedReader(\n         new java.io.InputStreamReader(cmdProc.getInputStream()));\nString line;\nwhile ((line \u003d stdoutReader.readLine()) !\u003d null) {\n   // process procs standard output here\n  output.append(line + \"\\n\");\n}\n\nthis.out \u003d output.toString();\n\n} catch (java.io.IOException e) {\nthis.out \u003d \"Error occurred\";\n}"],"spec":"add source directly %s.inputOnly","subStack1":-1,"subStack2":-1,"type":" ","typeName":""}
'''


@pytest.fixture
def if_else_lines():
    return IF_ELSE_RECORDS.splitlines()


@pytest.fixture
def if_else_records(if_else_lines):
    return parse_block_records(if_else_lines, "MainActivity.java_refreshTabsCount_moreBlock")


@pytest.fixture
def logic_text():
    return LOGIC_TEXT
